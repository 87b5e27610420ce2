"""Scan command - lists the nodes a build would include."""

import logging

from .base import BaseCommand, CommandContext, register_command
from ..errors import ConfigurationError
from ..scanner import scan_nodes_directory

logger = logging.getLogger(__name__)


@register_command("scan")
class ScanCommand(BaseCommand):

    @property
    def name(self) -> str:
        return "scan"

    @property
    def description(self) -> str:
        return "List discovered nodes without building"

    @property
    def help_text(self) -> str:
        return """List the nodes found in the nodes directory.

Usage:
    nrbuild scan [options]

Options:
    -c, --config-path PATH   Build configuration file (default: nrbuild.yaml)
"""

    async def execute(self, ctx: CommandContext) -> int:
        try:
            options = ctx.get_container().settings().options
            if not options.nodes_directory:
                print("No nodes directory configured.")
                return 0
            # Warnings are printed below, keep the log quiet.
            result = scan_nodes_directory(options.nodes_directory, silent=True)
        except ConfigurationError as e:
            logger.error("%s", e)
            return 1

        print(f"Nodes directory: {result.root}")
        for unit in result.units:
            status = "[OK]" if unit.valid else "[SKIPPED]"
            print(f"  {unit.name} {status}")
            if unit.valid:
                print(f"      ui:      {unit.ui_path}")
                print(f"      runtime: {unit.logic_path}")
            else:
                print(f"      {unit.reason}")

        invalid = [unit.name for unit in result.units if not unit.valid]
        if invalid:
            print(f"\n{len(invalid)} node(s) would be skipped: {', '.join(invalid)}")
        return 0
