import asyncio
import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from .config import BuildConfig, BuildResult, OutputAsset
from .protocols import BuildContext, BuildPlugin
from ..utils import resolve_path

logger = logging.getLogger(__name__)

HTML_SUFFIX = ".html"


class HookDrivenBundler(ABC):
    """Runs the plugin hook sequence of one pass around ``emit``.

    Order: ``config`` hooks, output directory preparation, ``emit``,
    ``transform_index_html`` on every emitted HTML asset, ``write_bundle``,
    then ``close_bundle``. The pass is complete only once every
    ``close_bundle`` hook has returned.
    """

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = Path.cwd() if cwd is None else Path(cwd)

    @abstractmethod
    async def emit(self, config: BuildConfig) -> list[OutputAsset]:
        """Produce the pass artifacts inside ``config.out_dir``."""

    async def build(
            self,
            config: BuildConfig,
            plugins: Sequence[BuildPlugin] = (),
    ) -> BuildResult:
        for plugin in plugins:
            updated = await plugin.config(config)
            if updated is not None:
                config = updated

        out_dir = resolve_path(config.out_dir, self.cwd)
        config = config.model_copy(update={"out_dir": out_dir})
        await asyncio.to_thread(self._prepare_out_dir, out_dir, config.empty_out_dir)

        logger.info("Building %d entr%s into %s (target: %s)",
                    len(config.inputs), "y" if len(config.inputs) == 1 else "ies",
                    out_dir, config.target)
        assets = await self.emit(config)

        result = BuildResult(out_dir=out_dir, assets=list(assets))
        ctx = BuildContext(self, result)

        for asset in result.assets:
            if asset.kind == "asset" and asset.file_name.endswith(HTML_SUFFIX):
                await self._transform_html(out_dir / asset.file_name, asset, plugins)

        for plugin in plugins:
            await plugin.write_bundle(config, result.assets, ctx)

        for plugin in plugins:
            await plugin.close_bundle(ctx)

        return result

    @staticmethod
    def _prepare_out_dir(out_dir: Path, empty: bool) -> None:
        if empty and out_dir.exists():
            logger.debug("Clearing output directory: %s", out_dir)
            shutil.rmtree(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    async def _transform_html(path: Path, asset: OutputAsset, plugins: Sequence[BuildPlugin]) -> None:
        html = original = await asyncio.to_thread(path.read_text, encoding="utf-8")
        for plugin in plugins:
            html = await plugin.transform_index_html(html, asset)
        if html != original:
            await asyncio.to_thread(path.write_text, html, encoding="utf-8")
