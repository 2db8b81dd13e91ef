"""Sandfix Core - repair package databases of a relocated sandbox."""

from sandfix_core.config import SandfixConfig, load_config
from sandfix_core.errors import SandfixError
from sandfix_core.pathindex import DirectorySnapshot, PathIndex
from sandfix_core.pipeline import RelocationReport, relocate
from sandfix_core.repair import repair_record, repair_store
from sandfix_core.store import PackageIdentity, PackageRecord, PackageStore

__version__ = "0.1.0"

__all__ = [
    "DirectorySnapshot",
    "PackageIdentity",
    "PackageRecord",
    "PackageStore",
    "PathIndex",
    "RelocationReport",
    "SandfixConfig",
    "SandfixError",
    "load_config",
    "relocate",
    "repair_record",
    "repair_store",
]
