"""Exception and warning types raised while orchestrating a node build."""

from typing import Optional


class NodeRedBuildError(Exception):
    """Base class for every fatal build orchestration error."""


class ConfigurationError(NodeRedBuildError):
    """Invalid or missing configuration; aborts the whole build."""


class BundlerError(NodeRedBuildError):
    """The external bundler failed to produce a pass."""

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class WriteError(NodeRedBuildError):
    """An artifact could not be written after the build succeeded.

    Never propagated out of a build: it is reported through the bundler's
    error channel instead.
    """


class ValidationWarning(UserWarning):
    """A node directory is missing one of its required files."""

    def __init__(self, unit: str, reason: str) -> None:
        super().__init__(f"Node {unit} {reason}. Skipping.")
        self.unit = unit
        self.reason = reason
