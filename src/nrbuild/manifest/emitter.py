"""Output package descriptor installed into Node-RED."""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

import pydantic

from .reader import ReferenceManifest
from ..bundler.config import OutputAsset
from ..config.models import PluginOptions
from ..errors import ConfigurationError, WriteError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"
MANIFEST_VERSION = "1.0.0"
HOST_KEY = "node-red"
UI_SUFFIX = ".html"
LOGIC_SUFFIX = ".js"


class NodeRedSection(pydantic.BaseModel):
    nodes: dict[str, str] = pydantic.Field(default_factory=dict)


class OutputManifest(pydantic.BaseModel):
    name: str
    version: str = MANIFEST_VERSION
    dependencies: Optional[dict[str, str]] = None
    dev_dependencies: Optional[dict[str, str]] = pydantic.Field(default=None, alias="devDependencies")
    node_red: NodeRedSection = pydantic.Field(default_factory=NodeRedSection, alias=HOST_KEY)

    model_config = pydantic.ConfigDict(populate_by_name=True)

    @property
    def nodes(self) -> dict[str, str]:
        return self.node_red.nodes

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def resolve_package_name(options: PluginOptions, reference: Optional[ReferenceManifest]) -> str:
    """
    Name of the generated package.

    The reference descriptor name is used when ``copy_package_name`` is on
    and a descriptor was loaded, the explicit ``package_name`` otherwise.

    :raises ConfigurationError: If neither yields a name.
    """
    copy_name = options.manifest_enabled and options.package_json.copy_package_name
    if copy_name and reference is not None and reference.name:
        return reference.name
    if options.package_name:
        return options.package_name
    raise ConfigurationError(
        "No package name available: set package_name, or enable "
        "package_json.copy_package_name with a reference package.json that has a name."
    )


def create_manifest(options: PluginOptions, reference: Optional[ReferenceManifest]) -> OutputManifest:
    manifest = OutputManifest(name=resolve_package_name(options, reference))

    if options.manifest_enabled and options.package_json.copy_dependencies and reference is not None:
        manifest.dependencies = dict(reference.dependencies or {})
        manifest.dev_dependencies = dict(reference.dev_dependencies or {})

    return manifest


def logic_file_for(node: str) -> str:
    """Runtime module of a node, at the root of the output directory."""
    return f"{node}{LOGIC_SUFFIX}"


def record_assets(manifest: OutputManifest, assets: Iterable[OutputAsset]) -> list[str]:
    """
    Register a node for every emitted UI definition.

    The compiled logic module is predicted as ``<node>.js`` at the output
    root, wherever the bundler placed the HTML; the runtime pass writes it
    there later.

    :return: Names of the recorded nodes.
    """
    recorded = []
    for asset in assets:
        if asset.kind != "asset" or not asset.file_name.endswith(UI_SUFFIX):
            continue
        manifest.nodes[asset.stem] = logic_file_for(asset.stem)
        recorded.append(asset.stem)
    return recorded


def write_manifest(manifest: OutputManifest, out_dir: Path) -> Path:
    """
    Write ``package.json`` into the output directory.

    :raises WriteError: If the file cannot be written.
    """
    path = Path(out_dir) / MANIFEST_FILENAME
    try:
        path.write_text(json.dumps(manifest.to_document(), indent=2), encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Error writing {MANIFEST_FILENAME}: {exc}") from exc
    logger.debug("Wrote %s with %d node(s)", path, len(manifest.nodes))
    return path


def missing_modules(manifest: OutputManifest, out_dir: Path) -> list[str]:
    """Nodes whose compiled logic module does not exist in ``out_dir``."""
    return [name for name, module in manifest.nodes.items() if not (Path(out_dir) / module).is_file()]


def reconcile(manifest: OutputManifest, out_dir: Path) -> list[str]:
    """Drop nodes whose compiled logic module was not produced."""
    dropped = missing_modules(manifest, out_dir)
    for name in dropped:
        logger.warning("Node %s has no compiled module %s; removing it from %s",
                       name, manifest.nodes[name], MANIFEST_FILENAME)
        del manifest.nodes[name]
    return dropped
