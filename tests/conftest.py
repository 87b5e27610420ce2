import json
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nrbuild.bundler.base import HookDrivenBundler  # noqa: E402
from nrbuild.bundler.config import BuildConfig, OutputAsset  # noqa: E402


class RecordingBundler(HookDrivenBundler):
    """In-process bundler writing predictable artifacts.

    The UI pass writes ``<name>.html`` referencing a hashed script under the
    assets directory, the way Vite does with ``base`` applied. The runtime
    pass writes ``<name>.js`` for every input not listed in ``skip_runtime``.
    With ``html_dir`` the HTML lands in ``<html_dir>/<name>/``, like Vite's
    multi page output keeping the source layout.
    """

    def __init__(self, cwd: Path, skip_runtime=(), html_dir=None):
        super().__init__(cwd)
        self.configs: list[BuildConfig] = []
        self.skip_runtime = set(skip_runtime)
        self.html_dir = html_dir

    async def emit(self, config: BuildConfig) -> list[OutputAsset]:
        self.configs.append(config)
        if config.target == "node":
            return self._emit_runtime(config)
        return self._emit_ui(config)

    def _emit_ui(self, config):
        assets = []
        base = config.base or "/"
        assets_dir = config.assets_dir or "assets"
        for name in config.inputs:
            script = f"{assets_dir}/{name}-1a2b3c.js"
            (config.out_dir / assets_dir).mkdir(parents=True, exist_ok=True)
            (config.out_dir / script).write_text("console.log('editor');\n")
            html = f"{self.html_dir}/{name}/{name}.html" if self.html_dir else f"{name}.html"
            (config.out_dir / html).parent.mkdir(parents=True, exist_ok=True)
            (config.out_dir / html).write_text(
                f'<script type="module" src="{base}{script}"></script>\n'
                f'<link rel="stylesheet" href="https://cdn.example.com/x.css">\n'
            )
            assets.append(OutputAsset(file_name=script, kind="chunk"))
            assets.append(OutputAsset(file_name=html))
        return assets

    def _emit_runtime(self, config):
        assets = []
        for name in config.inputs:
            if name in self.skip_runtime:
                continue
            (config.out_dir / f"{name}.js").write_text("module.exports = function (RED) {};\n")
            assets.append(OutputAsset(file_name=f"{name}.js", kind="chunk"))
        return assets

    @property
    def ui_config(self) -> BuildConfig:
        return next(c for c in self.configs if c.target == "browser")

    @property
    def runtime_configs(self) -> list[BuildConfig]:
        return [c for c in self.configs if c.target == "node"]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_node(temp_dir):
    """Create a node directory below ``<temp_dir>/nodes``."""

    def _make(name, html=True, logic=".ts", root="nodes"):
        node_dir = temp_dir / root / name
        node_dir.mkdir(parents=True, exist_ok=True)
        if html:
            (node_dir / f"{name}.html").write_text(
                f'<script type="text/javascript">RED.nodes.registerType("{name}", {{}});</script>\n'
            )
        if logic:
            (node_dir / f"{name}{logic}").write_text(
                f'module.exports = function (RED) {{ RED.nodes.registerType("{name}", function () {{}}); }};\n'
            )
        return node_dir

    return _make


@pytest.fixture
def reference_package(temp_dir):
    """Write the project package.json used as reference manifest."""

    def _write(content=None, name="package.json"):
        if content is None:
            content = {
                "name": "pkg-a",
                "version": "0.3.0",
                "scripts": {"build": "nrbuild build"},
                "dependencies": {"x": "1.0.0"},
                "devDependencies": {"node-red": "^4.0.0"},
            }
        path = temp_dir / name
        path.write_text(json.dumps(content))
        return path

    return _write


@pytest.fixture
def bundler(temp_dir):
    return RecordingBundler(temp_dir)


@pytest.fixture
def bundler_factory(temp_dir):
    def _make(**kwargs):
        return RecordingBundler(temp_dir, **kwargs)

    return _make


@pytest.fixture
def in_temp_dir(temp_dir):
    """Run the test from inside the temporary directory, without NRBUILD_ env."""
    cwd = os.getcwd()
    env = {k: v for k, v in os.environ.items() if not k.startswith("NRBUILD_")}
    os.chdir(temp_dir)
    try:
        with patch.dict(os.environ, env, clear=True):
            yield temp_dir
    finally:
        os.chdir(cwd)
