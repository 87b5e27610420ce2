from .emitter import (
    HOST_KEY,
    MANIFEST_FILENAME,
    OutputManifest,
    create_manifest,
    missing_modules,
    reconcile,
    record_assets,
    resolve_package_name,
    write_manifest,
)
from .reader import ReferenceManifest, read_reference_manifest

__all__ = [
    "HOST_KEY",
    "MANIFEST_FILENAME",
    "OutputManifest",
    "create_manifest",
    "missing_modules",
    "reconcile",
    "record_assets",
    "resolve_package_name",
    "write_manifest",
    "ReferenceManifest",
    "read_reference_manifest",
]
