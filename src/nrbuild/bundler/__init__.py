from .base import HookDrivenBundler
from .config import (
    FORCED_RUNTIME_FIELDS,
    BuildConfig,
    BuildResult,
    OutputAsset,
    merge_runtime_config,
)
from .external import ExternalBundler, to_vite_options
from .protocols import BuildContext, BuildPlugin, Bundler

__all__ = [
    "HookDrivenBundler",
    "FORCED_RUNTIME_FIELDS",
    "BuildConfig",
    "BuildResult",
    "OutputAsset",
    "merge_runtime_config",
    "ExternalBundler",
    "to_vite_options",
    "BuildContext",
    "BuildPlugin",
    "Bundler",
]
