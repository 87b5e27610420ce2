"""Bundler-neutral description of one build pass and its results."""

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional

import pydantic

from ..errors import ConfigurationError
from ..utils import deep_update

logger = logging.getLogger(__name__)

# Fields the runtime pass sets itself; user overrides never replace them.
FORCED_RUNTIME_FIELDS = frozenset({
    "target",
    "out_dir",
    "format",
    "empty_out_dir",
    "preserve_modules",
    "inputs",
    "entry_file_names",
})


class BuildConfig(pydantic.BaseModel):
    """Inputs and output layout of a single bundler pass."""

    root: Optional[Path] = None
    base: Optional[str] = None
    mode: str = "production"
    out_dir: Path = Path("dist")
    assets_dir: Optional[str] = None
    inputs: dict[str, Path] = pydantic.Field(default_factory=dict)
    target: Literal["browser", "node"] = "browser"
    format: Literal["es", "cjs"] = "es"
    preserve_modules: bool = False
    entry_file_names: Optional[str] = None
    empty_out_dir: bool = True
    sourcemap: bool = False
    minify: bool = True
    external: list[str] = pydantic.Field(default_factory=list)
    extra: dict[str, Any] = pydantic.Field(default_factory=dict)

    model_config = pydantic.ConfigDict(extra="forbid")


@dataclass(frozen=True)
class OutputAsset:
    """A file written by a pass, relative to the pass output directory."""

    file_name: str
    kind: Literal["asset", "chunk"] = "asset"

    @property
    def stem(self) -> str:
        return Path(self.file_name).stem


@dataclass
class BuildResult:
    out_dir: Path
    assets: list[OutputAsset] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def merge_runtime_config(forced: BuildConfig, user: Optional[dict[str, Any]] = None) -> BuildConfig:
    """
    Layer a user supplied partial configuration over the forced runtime pass.

    Precedence, field by field:

    * ``target``, ``out_dir``, ``format``, ``empty_out_dir``,
      ``preserve_modules``, ``inputs`` and ``entry_file_names`` always keep
      the forced value; user values are dropped with a warning.
    * ``external`` is the union of both lists, forced entries first; a single
      name is accepted as a one item list.
    * ``extra`` is deep merged, user keys winning; keys it shares with the
      typed fields are still overridden when the bundler renders the pass.
    * any other known field takes the user value.

    :param forced: The runtime configuration computed by the build.
    :param user: Partial configuration, keyed by BuildConfig field names.
    :return: A new configuration; ``forced`` is not modified.
    :raises ConfigurationError: On unknown fields or invalid values.
    """
    merged = forced.model_dump()

    for key, value in (user or {}).items():
        if key not in BuildConfig.model_fields:
            raise ConfigurationError(f"Unknown runtime build option: {key!r}")

        if key in FORCED_RUNTIME_FIELDS:
            logger.warning("Ignoring runtime build option %r: it is managed by the build", key)
            continue

        if key == "external":
            if isinstance(value, str):
                value = [value]
            elif not isinstance(value, (list, tuple)):
                raise ConfigurationError(
                    f"Invalid runtime build options: external must be a list, got {type(value).__name__}"
                )
            merged["external"] = list(dict.fromkeys([*merged["external"], *value]))
        elif key == "extra":
            merged["extra"] = deep_update(copy.deepcopy(merged["extra"]), dict(value))
        else:
            merged[key] = value

    try:
        return BuildConfig.model_validate(merged)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid runtime build options: {exc}") from exc
