import logging
from pathlib import Path
from typing import Optional, Union

from dependency_injector import containers, providers

from .bundler.external import ExternalBundler
from .config.settings import load_settings

logger = logging.getLogger(__name__)


class BuildContainer(containers.DeclarativeContainer):
    config_path = providers.Object(None)

    settings = providers.Singleton(load_settings, config_path=config_path)

    bundler = providers.Factory(
        ExternalBundler,
        command=settings.provided.bundler_command,
    )


def create_container(config_path: Optional[Union[str, Path]] = None) -> BuildContainer:
    """Create a container whose settings are read from ``config_path``."""
    container = BuildContainer()
    if config_path is not None:
        logger.debug("Using build configuration file: %s", config_path)
        container.config_path.override(providers.Object(config_path))
    return container
