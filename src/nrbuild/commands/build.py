"""Build command - runs the UI and runtime passes."""

import logging

from .base import BaseCommand, CommandContext, register_command
from ..errors import NodeRedBuildError
from ..orchestrator import run_build

logger = logging.getLogger(__name__)


@register_command("build")
class BuildCommand(BaseCommand):
    """Builds every node into an installable Node-RED package."""

    @property
    def name(self) -> str:
        return "build"

    @property
    def description(self) -> str:
        return "Build the nodes into an installable package"

    @property
    def help_text(self) -> str:
        return """Build the nodes into an installable Node-RED package.

Runs the UI pass (editor HTML and its assets), writes package.json into
the output directory, then compiles the runtime modules of every node.

Usage:
    nrbuild build [options]

Options:
    -c, --config-path PATH   Build configuration file (default: nrbuild.yaml)
    --no-runtime             Skip the runtime pass
    --no-manifest            Do not write package.json
    --silent                 Do not report skipped nodes
    -v, --verbose            Increase verbosity (-v, -vv)
"""

    async def execute(self, ctx: CommandContext) -> int:
        try:
            container = ctx.get_container()
            settings = container.settings()

            update = {}
            if ctx.has_flag("--no-runtime"):
                update["runtime_build"] = False
            if ctx.has_flag("--no-manifest"):
                update["package_json"] = False
            if ctx.has_flag("--silent"):
                update["silent"] = True
            options = settings.options.model_copy(update=update)

            report = await run_build(options, container.bundler(), settings.build)
        except NodeRedBuildError as e:
            logger.error("Build failed: %s", e)
            return 1

        print(f"Output: {report.out_dir}")
        for node, module in sorted(report.nodes.items()):
            print(f"  {node}: {module}")
        for error in report.errors:
            print(f"  error: {error}")

        # Write errors leave usable artifacts behind; the build still counts.
        return 0
