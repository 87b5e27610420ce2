import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .bundler.config import BuildConfig
from .errors import ConfigurationError
from .scanner import ExtensionUnit

logger = logging.getLogger(__name__)

# Node-RED only serves editor assets from this directory of a package.
ASSETS_DIR = "resources"


@dataclass
class BuildPlan:
    """Entry points of both passes, derived from the valid nodes."""

    entries: dict[str, Path] = field(default_factory=dict)
    runtime_inputs: list[Path] = field(default_factory=list)

    @property
    def runtime_entries(self) -> dict[str, Path]:
        # Node directories are named after their files, so the stem is the node.
        return {path.stem: path for path in self.runtime_inputs}

    def __bool__(self) -> bool:
        return bool(self.entries)


def synthesize_plan(units: Iterable[ExtensionUnit]) -> BuildPlan:
    plan = BuildPlan()
    for unit in units:
        if not unit.valid:
            continue
        plan.entries[unit.name] = unit.ui_path
        plan.runtime_inputs.append(unit.logic_path)
    return plan


def check_assets_dir(config: BuildConfig, silent: bool = False) -> None:
    """
    Ensure the UI pass emits its assets where Node-RED serves them from.

    :raises ConfigurationError: If another assets directory is configured.
    """
    if silent or config.assets_dir is None:
        return
    if config.assets_dir != ASSETS_DIR:
        raise ConfigurationError(
            f"The bundler assets directory must be {ASSETS_DIR!r} "
            f"(Node-RED only serves node resources from it), got {config.assets_dir!r}."
        )


def apply_plan(config: BuildConfig, plan: BuildPlan, base: str) -> BuildConfig:
    """Merge the UI entries into the host configuration of the first pass."""
    update = {"inputs": {**config.inputs, **plan.entries}}
    if config.assets_dir is None:
        update["assets_dir"] = ASSETS_DIR
    if config.base is None:
        update["base"] = base
    logger.debug("UI pass entries: %s", sorted(update["inputs"]))
    return config.model_copy(update=update)
