"""Second pass: compiles node logic into modules Node-RED can require."""

import asyncio
import logging
from typing import Optional

from .bundler.config import BuildConfig, BuildResult, merge_runtime_config
from .bundler.protocols import BuildContext
from .errors import WriteError
from .manifest.emitter import missing_modules, reconcile, write_manifest
from .session import BuildSession

logger = logging.getLogger(__name__)

HOST_RUNTIME_PACKAGE = "node-red"


def runtime_config(session: BuildSession) -> BuildConfig:
    """
    Configuration of the runtime pass.

    Same output directory as the UI pass and never cleared, Node.js target,
    CommonJS with one module per input, dependencies left as imports so they
    resolve to the copies installed next to the package.
    """
    ui_config = session.ui_config
    external = [*session.reference.dependency_names] if session.reference is not None else []
    external.append(HOST_RUNTIME_PACKAGE)

    forced = BuildConfig(
        root=ui_config.root,
        mode=ui_config.mode,
        out_dir=ui_config.out_dir,
        inputs=session.plan.runtime_entries,
        target="node",
        format="cjs",
        preserve_modules=True,
        entry_file_names="[name].js",
        empty_out_dir=False,
        sourcemap=ui_config.sourcemap,
        minify=False,
        external=list(dict.fromkeys(external)),
    )
    return merge_runtime_config(forced, session.options.runtime_overrides)


async def run_runtime_build(session: BuildSession, ctx: BuildContext) -> Optional[BuildResult]:
    """
    Run the runtime pass once the UI pass and its manifest are written.

    Skipped when disabled or when no node was found. After it ran, nodes
    whose module was not produced are dropped from the manifest.
    """
    options = session.options

    if not options.runtime_build_enabled or not session.plan.runtime_inputs:
        logger.info("Skipping runtime build (%s)",
                    "disabled" if not options.runtime_build_enabled else "no nodes found")
        if session.manifest is not None:
            missing = await asyncio.to_thread(missing_modules, session.manifest, session.out_dir)
            if missing and not options.silent:
                logger.warning("Package manifest references modules that were not built: %s",
                               ", ".join(session.manifest.nodes[name] for name in missing))
        return None

    config = runtime_config(session)
    logger.info("Building runtime modules for %d node(s)", len(config.inputs))
    result = await session.bundler.build(config)
    session.runtime_result = result

    for error in result.errors:
        ctx.error(error)

    if session.manifest is not None:
        dropped = await asyncio.to_thread(reconcile, session.manifest, session.out_dir)
        if dropped:
            try:
                session.manifest_path = await asyncio.to_thread(
                    write_manifest, session.manifest, session.out_dir
                )
            except WriteError as exc:
                ctx.error(str(exc))

    return result
