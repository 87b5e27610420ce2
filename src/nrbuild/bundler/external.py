"""Runs a pass with an external bundler executable (Vite by default)."""

import asyncio
import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from .base import HookDrivenBundler
from .config import BuildConfig, OutputAsset
from ..errors import BundlerError
from ..utils import deep_update

logger = logging.getLogger(__name__)

CONFIG_PLACEHOLDER = "{config}"
CHUNK_SUFFIXES = (".js", ".mjs", ".cjs")


def to_vite_options(config: BuildConfig) -> dict[str, Any]:
    """
    Render a pass configuration as a Vite inline config document.

    ``config.extra`` is the base document; every key derived from a typed
    field overrides it.
    """
    output: dict[str, Any] = {"format": config.format}
    if config.preserve_modules:
        output["preserveModules"] = True
    if config.entry_file_names:
        output["entryFileNames"] = config.entry_file_names

    rollup_options: dict[str, Any] = {
        "input": {name: str(path) for name, path in config.inputs.items()},
        "output": output,
    }
    if config.external:
        rollup_options["external"] = list(config.external)

    build: dict[str, Any] = {
        "outDir": str(config.out_dir),
        "emptyOutDir": config.empty_out_dir,
        "sourcemap": config.sourcemap,
        "minify": config.minify,
        "rollupOptions": rollup_options,
    }
    if config.assets_dir is not None:
        build["assetsDir"] = config.assets_dir

    options: dict[str, Any] = {"mode": config.mode, "build": build}
    if config.root is not None:
        options["root"] = str(config.root)
    if config.base is not None:
        options["base"] = config.base
    if config.target == "node":
        build["ssr"] = True
        options["ssr"] = {"target": "node"}

    # Typed fields win over the passthrough document; entries are replaced, not merged.
    document = deep_update(copy.deepcopy(config.extra), options)
    document["build"]["rollupOptions"]["input"] = dict(rollup_options["input"])
    if config.target == "node":
        # Dependencies stay imports in Node.js modules.
        document["ssr"].pop("noExternal", None)
    return document


def snapshot(directory: Path) -> dict[str, int]:
    """Map every file below ``directory`` to its modification time."""
    if not directory.is_dir():
        return {}
    return {
        path.relative_to(directory).as_posix(): path.stat().st_mtime_ns
        for path in directory.rglob("*")
        if path.is_file()
    }


def emitted_assets(before: dict[str, int], after: dict[str, int]) -> list[OutputAsset]:
    """Files that are new or were rewritten between two snapshots."""
    assets = []
    for file_name in sorted(after):
        if before.get(file_name) == after[file_name]:
            continue
        kind = "chunk" if file_name.endswith(CHUNK_SUFFIXES) else "asset"
        assets.append(OutputAsset(file_name=file_name, kind=kind))
    return assets


class ExternalBundler(HookDrivenBundler):
    """Bundler adapter driving an external command for every pass.

    The pass configuration is written next to the project as an ES module
    config file and its path substituted for ``{config}`` in the command.
    """

    def __init__(
            self,
            command: Sequence[str],
            cwd: Optional[Path] = None,
            env: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(cwd)
        if not command:
            raise ValueError("Bundler command must not be empty")
        self.command = list(command)
        self.env = env

    def config_file_for(self, config: BuildConfig) -> Path:
        return self.cwd / f".nrbuild.{config.target}.config.mjs"

    def render_config(self, config: BuildConfig) -> str:
        document = json.dumps(to_vite_options(config), indent=2)
        return f"export default {document};\n"

    async def emit(self, config: BuildConfig) -> list[OutputAsset]:
        config_file = self.config_file_for(config)
        config_file.write_text(self.render_config(config), encoding="utf-8")

        before = await asyncio.to_thread(snapshot, config.out_dir)
        try:
            await self._run(config_file)
        finally:
            config_file.unlink(missing_ok=True)
        after = await asyncio.to_thread(snapshot, config.out_dir)

        assets = emitted_assets(before, after)
        logger.debug("Bundler emitted %d file(s) into %s", len(assets), config.out_dir)
        return assets

    async def _run(self, config_file: Path) -> None:
        argv = [part.replace(CONFIG_PLACEHOLDER, str(config_file)) for part in self.command]
        logger.debug("Running bundler: %s", " ".join(argv))

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=self.cwd,
                env=self.env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            raise BundlerError(f"Unable to start bundler {argv[0]!r}: {exc}") from exc

        stdout, _ = await process.communicate()
        output = stdout.decode("utf-8", errors="replace") if stdout else ""
        for line in output.splitlines():
            logger.debug("[bundler] %s", line)

        if process.returncode != 0:
            tail = "\n".join(output.splitlines()[-20:])
            raise BundlerError(
                f"Bundler exited with code {process.returncode}:\n{tail}",
                returncode=process.returncode,
            )
