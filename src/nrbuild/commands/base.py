"""Base command class and registry for the nrbuild CLI."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from ..container import BuildContainer, create_container


@dataclass
class CommandContext:
    """Context passed to command execution.

    Contains parsed arguments and the container commands resolve their
    settings and bundler from.
    """
    command: str
    args: list[str] = field(default_factory=list)
    verbose: int = 0
    config_path: Optional[str] = None
    container: Optional[BuildContainer] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def get_container(self) -> BuildContainer:
        if self.container is None:
            self.container = create_container(self.config_path)
        return self.container

    def has_flag(self, *flags: str) -> bool:
        return any(flag in self.args for flag in flags)


class BaseCommand(ABC):
    """Abstract base class for CLI commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The command name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description of the command."""
        pass

    @property
    def help_text(self) -> str:
        """Detailed help text. Override for custom help."""
        return self.description

    @abstractmethod
    async def execute(self, ctx: CommandContext) -> int:
        """Execute the command, returning the process exit code."""
        pass


_command_registry: dict[str, type] = {}


def register_command(name: str):
    """Decorator to register a command class in the registry.

    Usage:
        @register_command("build")
        class BuildCommand(BaseCommand):
            ...
    """

    def decorator(cls):
        _command_registry[name] = cls
        return cls

    return decorator


def get_registered_commands() -> dict[str, type]:
    """Get all registered command classes."""
    return _command_registry.copy()
