"""Discovery of node directories.

Every immediate subdirectory ``d`` of the nodes root is one node and must
hold ``d/d.html`` (editor UI definition) and ``d/d.ts`` or, failing that,
``d/d.js`` (runtime logic). Directories missing either file are reported
and left out of the build.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError, ValidationWarning
from .utils import resolve_path

logger = logging.getLogger(__name__)

UI_EXTENSION = ".html"
# Preference order: the first existing one wins.
LOGIC_EXTENSIONS = (".ts", ".js")


@dataclass(frozen=True)
class ExtensionUnit:
    """One node directory as discovered on disk."""

    name: str
    ui_path: Path
    logic_path: Optional[Path]
    valid: bool
    reason: Optional[str] = None


@dataclass
class ScanResult:
    root: Path
    units: list[ExtensionUnit] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def valid_units(self) -> list[ExtensionUnit]:
        return [unit for unit in self.units if unit.valid]

    @property
    def entries(self) -> dict[str, Path]:
        return {unit.name: unit.ui_path for unit in self.valid_units}


def find_logic_file(directory: Path, name: str) -> Optional[Path]:
    for extension in LOGIC_EXTENSIONS:
        candidate = directory / f"{name}{extension}"
        if candidate.is_file():
            return candidate
    return None


def inspect_unit(directory: Path) -> tuple[ExtensionUnit, Optional[ValidationWarning]]:
    """Check a single node directory for its two required files."""
    name = directory.name
    ui_path = directory / f"{name}{UI_EXTENSION}"
    logic_path = find_logic_file(directory, name)

    missing = []
    if not ui_path.is_file():
        missing.append(ui_path.name)
    if logic_path is None:
        missing.append(" or ".join(f"{name}{ext}" for ext in LOGIC_EXTENSIONS))

    if not missing:
        return ExtensionUnit(name=name, ui_path=ui_path, logic_path=logic_path, valid=True), None

    reason = f"is missing {' and '.join(missing)}"
    unit = ExtensionUnit(name=name, ui_path=ui_path, logic_path=logic_path, valid=False, reason=reason)
    return unit, ValidationWarning(name, reason)


def scan_nodes_directory(
        root: Union[str, Path],
        silent: bool = False,
        cwd: Union[str, Path, None] = None,
) -> ScanResult:
    """
    Discover the nodes below ``root``.

    :param root: Nodes root, absolute or relative to ``cwd``.
    :param silent: Suppress warnings and the discovery summary.
    :param cwd: Base for a relative root, defaults to the working directory.
    :return: Every discovered unit; warnings are only recorded when not silent.
    :raises ConfigurationError: If the root is not a directory or holds no
        subdirectories.
    """
    nodes_dir = resolve_path(root, cwd)

    try:
        if not nodes_dir.is_dir():
            raise ConfigurationError(
                f"The nodes directory {nodes_dir} does not exist or is not a directory."
            )
        subdirs = sorted(path for path in nodes_dir.iterdir() if path.is_dir())
    except OSError as exc:
        raise ConfigurationError(f"Unable to read the nodes directory {nodes_dir}: {exc}") from exc

    if not subdirs:
        raise ConfigurationError(
            f"The nodes directory {nodes_dir} does not contain any subdirectories. "
            "The bundler would have no entry points."
        )

    result = ScanResult(root=nodes_dir)
    for subdir in subdirs:
        unit, warning = inspect_unit(subdir)
        result.units.append(unit)
        if warning is not None and not silent:
            logger.warning(str(warning))
            result.warnings.append(warning)

    if not silent:
        logger.info(
            "Found %d nodes in %s: %s",
            len(result.valid_units),
            nodes_dir,
            json.dumps({name: str(path) for name, path in result.entries.items()}, indent=2),
        )

    return result
