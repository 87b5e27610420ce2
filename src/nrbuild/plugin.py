"""Build plugin adapting a bundler to Node-RED node packaging."""

import asyncio
import logging
from typing import Optional, Sequence

from .bundler.config import BuildConfig, OutputAsset
from .bundler.protocols import BuildContext
from .errors import WriteError
from .manifest.emitter import create_manifest, record_assets, write_manifest
from .plan import apply_plan, check_assets_dir, synthesize_plan
from .rewriter import needs_rewrite, rewrite_asset_paths
from .runtime import run_runtime_build
from .scanner import scan_nodes_directory
from .session import BuildSession

logger = logging.getLogger(__name__)

PLUGIN_NAME = "nodered-build"


class NodeRedPlugin:
    """Hooks of the UI pass.

    ``config`` discovers the nodes and adds their UI definitions as entries,
    ``transform_index_html`` fixes asset paths, ``write_bundle`` writes the
    package descriptor and ``close_bundle`` runs the runtime pass.
    """

    name = PLUGIN_NAME

    def __init__(self, session: BuildSession) -> None:
        self.session = session

    async def config(self, config: BuildConfig) -> Optional[BuildConfig]:
        options = self.session.options
        if not options.nodes_directory:
            logger.debug("No nodes directory configured; keeping the configured entries")
            return None

        scan = await asyncio.to_thread(
            scan_nodes_directory, options.nodes_directory, options.silent, self.session.cwd
        )
        self.session.scan = scan
        self.session.plan = synthesize_plan(scan.units)

        check_assets_dir(config, options.silent)
        return apply_plan(config, self.session.plan, f"/resources/{self.session.nodes_root_name}/")

    async def transform_index_html(self, html: str, asset: OutputAsset) -> str:
        root_name = self.session.nodes_root_name
        if not root_name or not needs_rewrite(html, root_name):
            return html
        return rewrite_asset_paths(html, root_name, self.session.package_name)

    async def write_bundle(
            self,
            config: BuildConfig,
            assets: Sequence[OutputAsset],
            ctx: BuildContext,
    ) -> None:
        session = self.session
        session.ui_config = config

        if not session.options.manifest_enabled:
            return

        session.manifest = create_manifest(session.options, session.reference)
        recorded = record_assets(session.manifest, assets)
        logger.debug("Recorded nodes in package manifest: %s", recorded)

        try:
            session.manifest_path = await asyncio.to_thread(
                write_manifest, session.manifest, config.out_dir
            )
        except WriteError as exc:
            ctx.error(str(exc))

    async def close_bundle(self, ctx: BuildContext) -> None:
        await run_runtime_build(self.session, ctx)


def create_plugin(session: BuildSession) -> NodeRedPlugin:
    return NodeRedPlugin(session)
