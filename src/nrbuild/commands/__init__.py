"""nrbuild CLI commands."""

# Import command modules (registers them via @register_command decorator)
from . import build, scan
from .base import (
    CommandContext,
    BaseCommand,
    register_command,
    get_registered_commands,
)

__all__ = [
    "CommandContext",
    "BaseCommand",
    "register_command",
    "get_registered_commands",
    "build",
    "scan",
]
