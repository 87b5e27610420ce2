import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .bundler.config import BuildConfig, BuildResult
from .bundler.protocols import Bundler
from .config.models import PluginOptions
from .manifest.emitter import OutputManifest, resolve_package_name
from .manifest.reader import ReferenceManifest, read_reference_manifest
from .plan import BuildPlan
from .scanner import ScanResult

logger = logging.getLogger(__name__)


@dataclass
class BuildSession:
    """State of one build run, shared by the hooks of both passes.

    A fresh session is opened for every run; nothing carries over between
    runs of the same process.
    """

    options: PluginOptions
    bundler: Bundler
    cwd: Path
    reference: Optional[ReferenceManifest] = None
    scan: Optional[ScanResult] = None
    plan: BuildPlan = field(default_factory=BuildPlan)
    ui_config: Optional[BuildConfig] = None
    manifest: Optional[OutputManifest] = None
    manifest_path: Optional[Path] = None
    runtime_result: Optional[BuildResult] = None

    @classmethod
    async def open(
            cls,
            options: PluginOptions,
            bundler: Bundler,
            cwd: Union[str, Path, None] = None,
    ) -> "BuildSession":
        """
        Start a session, reading the reference package descriptor if one is
        configured.

        :raises ConfigurationError: If the descriptor is missing or malformed.
        """
        cwd = Path.cwd() if cwd is None else Path(cwd)
        session = cls(options=options, bundler=bundler, cwd=cwd)

        if options.manifest_enabled and options.package_json.path:
            session.reference = await asyncio.to_thread(
                read_reference_manifest, options.package_json.path, cwd
            )
            logger.debug("Using reference package %r", session.reference.name)

        return session

    @property
    def nodes_root_name(self) -> str:
        return Path(self.options.nodes_directory).name

    @property
    def package_name(self) -> str:
        return resolve_package_name(self.options, self.reference)

    @property
    def out_dir(self) -> Optional[Path]:
        return self.ui_config.out_dir if self.ui_config is not None else None
