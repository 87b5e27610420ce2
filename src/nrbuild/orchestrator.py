import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .bundler.config import BuildConfig, BuildResult
from .bundler.protocols import Bundler
from .config.models import PluginOptions
from .plugin import create_plugin
from .session import BuildSession

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Outcome of a complete two pass build."""

    session: BuildSession
    ui: BuildResult
    runtime: Optional[BuildResult] = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def out_dir(self) -> Path:
        return self.ui.out_dir

    @property
    def nodes(self) -> dict[str, str]:
        manifest = self.session.manifest
        return dict(manifest.nodes) if manifest is not None else {}


async def run_build(
        options: PluginOptions,
        bundler: Bundler,
        config: Optional[BuildConfig] = None,
        cwd: Union[str, Path, None] = None,
) -> BuildReport:
    """
    Build the UI bundle, write the package manifest, then build the runtime
    modules, strictly in that order.

    Configuration errors abort the run. Errors reported through the bundler
    error channel (a manifest that could not be written) are collected on
    the report instead.

    :param options: Plugin options.
    :param bundler: Bundler running both passes.
    :param config: Host configuration of the UI pass.
    :param cwd: Base directory for relative paths.
    :return: The build report.
    :raises ConfigurationError: On invalid configuration.
    :raises BundlerError: If a pass fails.
    """
    session = await BuildSession.open(options, bundler, cwd)
    plugin = create_plugin(session)

    ui_result = await bundler.build(config or BuildConfig(), [plugin])

    report = BuildReport(
        session=session,
        ui=ui_result,
        runtime=session.runtime_result,
        errors=list(ui_result.errors),
    )

    if report.ok:
        logger.info("Built %d node(s) into %s", len(report.nodes), report.out_dir)
    else:
        logger.error("Build finished with %d error(s)", len(report.errors))

    return report
