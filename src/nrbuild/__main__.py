"""Entry point for the nrbuild CLI (``nrbuild`` or ``python -m nrbuild``)."""

import argparse
import asyncio
import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

from .commands import CommandContext, get_registered_commands
from .utils import expanded_path

logger = logging.getLogger(__name__)

AVAILABLE_COMMANDS = {
    "build": "Build the nodes into an installable package (default)",
    "scan": "List discovered nodes without building",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    epilog_lines = ["\nAvailable commands:"]
    for cmd, desc in AVAILABLE_COMMANDS.items():
        epilog_lines.append(f"  {cmd:12} {desc}")
    epilog_lines.append("\nUse 'nrbuild <command> --help' for more information about a command.")

    parser = argparse.ArgumentParser(
        prog="nrbuild",
        description="nrbuild - Node-RED node package builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="\n".join(epilog_lines),
        add_help=False,  # --help is handled manually to support command-specific help
    )

    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show this help message and exit"
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="build",
        metavar="COMMAND",
        help="Command to execute (default: build)"
    )

    parser.add_argument(
        "args",
        nargs="*",
        metavar="ARGS",
        help="Command arguments"
    )

    parser.add_argument(
        "-c", "--config-path",
        type=Path,
        default=None,
        help="Path to the build configuration file (YAML)"
    )

    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (.ini)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Verbosity level: -v (INFO), -vv (DEBUG)"
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information"
    )

    return parser


def configure_logging(
        verbose: int = 0,
        logging_config: Optional[Path] = None
) -> None:
    """Configure logging based on CLI arguments.

    Priority:
    1. logging_config (.ini file) if provided
    2. verbose level (-v, -vv)
    3. Default (WARNING level for minimal output)
    """
    if logging_config and logging_config.exists():
        logging.config.fileConfig(logging_config)
        return

    level_map = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG
    }
    level = level_map.get(min(verbose, 2), logging.DEBUG)

    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if verbose >= 2:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if verbose < 3:
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def show_version() -> int:
    """Show version information."""
    try:
        from importlib.metadata import version
        ver = version("nodered-build")
    except Exception:
        ver = "unknown"
    print(f"nrbuild version {ver}")
    return 0


async def dispatch_command(
        command_name: str,
        ctx: CommandContext
) -> int:
    """Dispatch to the appropriate command handler.

    Args:
        command_name: Name of the command to execute.
        ctx: Command context with arguments and options.

    Returns:
        Exit code from the command.
    """
    registered_commands = get_registered_commands()

    if command_name not in registered_commands:
        logger.error("Unknown command: %s", command_name)
        print(f"\nUnknown command: {command_name}")
        print(f"Available commands: {', '.join(AVAILABLE_COMMANDS.keys())}")
        print("Use 'nrbuild --help' for more information.")
        return 1

    command = registered_commands[command_name]()
    return await command.execute(ctx)


def show_command_help(command_name: str) -> int:
    """Show help for a specific command."""
    registered_commands = get_registered_commands()

    if command_name not in registered_commands:
        print(f"Unknown command: {command_name}")
        print(f"Available commands: {', '.join(AVAILABLE_COMMANDS.keys())}")
        return 1

    print(registered_commands[command_name]().help_text)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()

    # Commands take their own flags; keep unknown ones for them.
    raw_args = sys.argv[1:] if argv is None else list(argv)
    args, remaining = parser.parse_known_args(raw_args)

    if args.version:
        return show_version()

    command_name = args.command
    command_args = (args.args or []) + remaining

    help_requested = args.help or "-h" in command_args or "--help" in command_args

    if help_requested:
        # The command defaults to build; only an explicit one gets its own help.
        if command_name not in raw_args:
            parser.print_help()
            return 0
        return show_command_help(command_name)

    logging_config = None
    if args.logging_config:
        logging_config = expanded_path(args.logging_config)

    # Builds report progress at INFO by default.
    verbose = args.verbose
    if command_name == "build" and verbose == 0:
        verbose = 1

    configure_logging(verbose=verbose, logging_config=logging_config)

    config_path = None
    if args.config_path:
        config_path = str(expanded_path(args.config_path))

    ctx = CommandContext(
        command=command_name,
        args=command_args,
        verbose=args.verbose,
        config_path=config_path,
    )

    try:
        return asyncio.run(dispatch_command(command_name, ctx))
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception:
        logger.exception("Error executing command")
        return 1


if __name__ == "__main__":
    sys.exit(main())
