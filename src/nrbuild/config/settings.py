import logging
from pathlib import Path
from typing import Optional, Union

import pydantic
from pydantic_settings import BaseSettings, SettingsConfigDict, YamlConfigSettingsSource

from .models import PluginOptions
from ..bundler.config import BuildConfig
from ..errors import ConfigurationError
from ..utils import expanded_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "nrbuild.yaml"
DEFAULT_BUNDLER_COMMAND = ["npx", "vite", "build", "--config", "{config}"]


class NodeRedBuildSettings(BaseSettings):
    """Project settings for a node build.

    Sources, highest priority first: init kwargs, ``NRBUILD_*`` environment
    variables, ``.env``, secrets, then the YAML config file.
    """

    model_config = SettingsConfigDict(
        env_prefix="NRBUILD_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        yaml_file=DEFAULT_CONFIG_FILE,
        yaml_file_encoding="utf-8",
    )

    config_path: Path = pydantic.Field(
        default=Path(DEFAULT_CONFIG_FILE),
        description="Path to the YAML build configuration file",
        exclude=True,
    )

    options: PluginOptions = pydantic.Field(
        default_factory=PluginOptions,
        description="Node discovery, manifest and runtime build options",
    )

    build: BuildConfig = pydantic.Field(
        default_factory=BuildConfig,
        description="Host bundler configuration for the UI pass",
    )

    bundler_command: list[str] = pydantic.Field(
        default_factory=lambda: list(DEFAULT_BUNDLER_COMMAND),
        description="Command running one bundler pass; {config} is replaced by the config file",
    )

    @classmethod
    def settings_customise_sources(
            cls,
            settings_cls,
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @pydantic.field_validator("config_path", mode="before")
    @classmethod
    def validate_config_path(cls, v):
        return expanded_path(v)


def load_settings(
        config_path: Optional[Union[str, Path]] = None,
        **overrides,
) -> NodeRedBuildSettings:
    """
    Load the project settings.

    An explicitly given config file must exist; the default one is optional.

    :param config_path: YAML file to read, defaults to ``NRBUILD_CONFIG_PATH``
        or ``nrbuild.yaml``.
    :param overrides: Values taking precedence over every other source.
    :return: The loaded settings.
    :raises ConfigurationError: If the file is missing or the values are invalid.
    """
    try:
        if config_path is None:
            # First load only resolves where the YAML file lives.
            config_path = NodeRedBuildSettings(**overrides).config_path
        else:
            config_path = expanded_path(config_path)
            if not config_path.is_file():
                raise ConfigurationError(f"Config file not found: {config_path.absolute()}")

        logger.debug("Loading build settings from: %s", config_path)

        settings_cls = type(
            NodeRedBuildSettings.__name__,
            (NodeRedBuildSettings,),
            {
                "model_config": SettingsConfigDict(
                    {**NodeRedBuildSettings.model_config, "yaml_file": config_path}
                ),
            },
        )
        return settings_cls(config_path=config_path, **overrides)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid build settings: {exc}") from exc
