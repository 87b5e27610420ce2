import logging
from typing import Optional, Protocol, Sequence, runtime_checkable

from .config import BuildConfig, BuildResult, OutputAsset

logger = logging.getLogger(__name__)


class BuildContext:
    """Handle given to plugin hooks for one pass.

    ``error`` is the bundler's own error channel: the message is logged and
    recorded on the pass result, the pass keeps going.
    """

    def __init__(self, bundler: "Bundler", result: BuildResult) -> None:
        self.bundler = bundler
        self.result = result

    def error(self, message: str) -> None:
        logger.error(message)
        self.result.errors.append(message)


@runtime_checkable
class BuildPlugin(Protocol):
    """Hooks a bundler calls, in declaration order, during one pass."""

    name: str

    async def config(self, config: BuildConfig) -> Optional[BuildConfig]:
        """Return an updated configuration, or None to keep it."""
        ...

    async def transform_index_html(self, html: str, asset: OutputAsset) -> str:
        ...

    async def write_bundle(
            self,
            config: BuildConfig,
            assets: Sequence[OutputAsset],
            ctx: BuildContext,
    ) -> None:
        ...

    async def close_bundle(self, ctx: BuildContext) -> None:
        ...


@runtime_checkable
class Bundler(Protocol):
    async def build(
            self,
            config: BuildConfig,
            plugins: Sequence[BuildPlugin] = (),
    ) -> BuildResult:
        ...
