"""Reference package descriptor (the project's own ``package.json``)."""

import logging
from pathlib import Path
from typing import Optional, Union

import pydantic
import yaml

from ..config.loaders import load_file
from ..errors import ConfigurationError
from ..utils import resolve_path

logger = logging.getLogger(__name__)


class ReferenceManifest(pydantic.BaseModel):
    """Fields of a package descriptor propagated into the output manifest."""

    name: str = ""
    dependencies: Optional[dict[str, str]] = None
    dev_dependencies: Optional[dict[str, str]] = pydantic.Field(default=None, alias="devDependencies")

    # Descriptors carry many more keys (scripts, license...), keep only ours.
    model_config = pydantic.ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def dependency_names(self) -> list[str]:
        return list(dict.fromkeys([*(self.dependencies or {}), *(self.dev_dependencies or {})]))


def read_reference_manifest(
        path: Union[str, Path],
        cwd: Union[str, Path, None] = None,
) -> ReferenceManifest:
    """
    Load and validate a reference package descriptor.

    :param path: Descriptor path, absolute or relative to ``cwd``.
    :param cwd: Base for a relative path, defaults to the working directory.
    :return: The parsed descriptor.
    :raises ConfigurationError: If the file is missing, unreadable or malformed.
    """
    descriptor = resolve_path(path, cwd)
    logger.debug("Reading reference package descriptor: %s", descriptor)

    try:
        content = load_file(descriptor)
    except (OSError, ValueError, RuntimeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read package descriptor {descriptor}: {exc}") from exc

    try:
        return ReferenceManifest.model_validate(content)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Malformed package descriptor {descriptor}: {exc}") from exc
