"""
nrbuild - builds Node-RED node packages with an external web bundler.

Each node directory yields an editor UI bundle and a runtime module; the
output directory becomes an installable package with its own package.json.
"""

from .bundler import (
    BuildConfig,
    BuildContext,
    BuildPlugin,
    BuildResult,
    Bundler,
    ExternalBundler,
    HookDrivenBundler,
    OutputAsset,
    merge_runtime_config,
)
from .config import (
    NodeRedBuildSettings,
    PackageJsonOptions,
    PluginOptions,
    load_file,
    load_settings,
)
from .container import BuildContainer, create_container
from .errors import (
    BundlerError,
    ConfigurationError,
    NodeRedBuildError,
    ValidationWarning,
    WriteError,
)
from .manifest import (
    OutputManifest,
    ReferenceManifest,
    create_manifest,
    read_reference_manifest,
    record_assets,
    resolve_package_name,
    write_manifest,
)
from .orchestrator import BuildReport, run_build
from .plan import BuildPlan, check_assets_dir, synthesize_plan
from .plugin import NodeRedPlugin, create_plugin
from .rewriter import rewrite_asset_paths
from .runtime import run_runtime_build, runtime_config
from .scanner import ExtensionUnit, ScanResult, scan_nodes_directory
from .session import BuildSession

__all__ = [
    # Bundler seam
    "BuildConfig",
    "BuildContext",
    "BuildPlugin",
    "BuildResult",
    "Bundler",
    "ExternalBundler",
    "HookDrivenBundler",
    "OutputAsset",
    "merge_runtime_config",
    # Config
    "NodeRedBuildSettings",
    "PackageJsonOptions",
    "PluginOptions",
    "load_file",
    "load_settings",
    # Container
    "BuildContainer",
    "create_container",
    # Errors
    "BundlerError",
    "ConfigurationError",
    "NodeRedBuildError",
    "ValidationWarning",
    "WriteError",
    # Manifest
    "OutputManifest",
    "ReferenceManifest",
    "create_manifest",
    "read_reference_manifest",
    "record_assets",
    "resolve_package_name",
    "write_manifest",
    # Build
    "BuildReport",
    "run_build",
    "BuildPlan",
    "check_assets_dir",
    "synthesize_plan",
    "NodeRedPlugin",
    "create_plugin",
    "rewrite_asset_paths",
    "run_runtime_build",
    "runtime_config",
    "ExtensionUnit",
    "ScanResult",
    "scan_nodes_directory",
    "BuildSession",
]
