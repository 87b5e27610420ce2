from typing import Any, Literal, Union

import pydantic

DEFAULT_NODES_DIRECTORY = "nodes"
DEFAULT_PACKAGE_JSON = "package.json"


class PackageJsonOptions(pydantic.BaseModel):
    """Controls how the generated package descriptor is built."""

    path: str = DEFAULT_PACKAGE_JSON
    copy_package_name: bool = pydantic.Field(default=True, alias="copyPackageName")
    copy_dependencies: bool = pydantic.Field(default=True, alias="copyDependencies")

    model_config = pydantic.ConfigDict(populate_by_name=True, extra="forbid")


class PluginOptions(pydantic.BaseModel):
    """User facing options of the node build plugin.

    Keys are accepted in snake_case or in the camelCase spelling used by
    JavaScript build configs (``nodesDirectory``, ``packageJson``...).
    """

    # Empty disables discovery; entries must then be configured by hand.
    nodes_directory: str = pydantic.Field(default=DEFAULT_NODES_DIRECTORY, alias="nodesDirectory")
    package_name: str = pydantic.Field(default="", alias="packageName")
    package_json: Union[Literal[False], PackageJsonOptions] = pydantic.Field(
        default_factory=PackageJsonOptions,
        alias="packageJson",
    )
    runtime_build: Union[bool, dict[str, Any]] = pydantic.Field(default=True, alias="runtimeBuild")
    silent: bool = False

    model_config = pydantic.ConfigDict(populate_by_name=True, extra="forbid")

    @pydantic.field_validator("package_json", mode="before")
    @classmethod
    def normalize_package_json(cls, v):
        if v is True or v is None:
            return PackageJsonOptions()
        return v

    @property
    def manifest_enabled(self) -> bool:
        return self.package_json is not False

    @property
    def runtime_build_enabled(self) -> bool:
        return self.runtime_build is not False

    @property
    def runtime_overrides(self) -> dict[str, Any]:
        """User supplied partial runtime build configuration, if any."""
        if isinstance(self.runtime_build, dict):
            return dict(self.runtime_build)
        return {}
