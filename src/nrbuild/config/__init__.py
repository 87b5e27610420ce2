from .loaders import load_file
from .models import PackageJsonOptions, PluginOptions
from .settings import NodeRedBuildSettings, load_settings

__all__ = [
    "load_file",
    "PackageJsonOptions",
    "PluginOptions",
    "NodeRedBuildSettings",
    "load_settings",
]
