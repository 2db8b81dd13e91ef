"""Package store models and on-disk I/O."""

from sandfix_core.store.conffile import parse_record, render_record
from sandfix_core.store.loader import load_store
from sandfix_core.store.locator import (
    GLOBAL_DB,
    USER_DB,
    find_broken_dbs,
    load_package_db,
    resolve_package_db,
)
from sandfix_core.store.models import (
    BEST_EFFORT_PATH_FIELDS,
    PATH_FIELDS,
    REQUIRED_PATH_FIELDS,
    PackageIdentity,
    PackageRecord,
    PackageStore,
    identity_of,
)
from sandfix_core.store.writer import write_store

__all__ = [
    "BEST_EFFORT_PATH_FIELDS",
    "GLOBAL_DB",
    "PATH_FIELDS",
    "PackageIdentity",
    "PackageRecord",
    "PackageStore",
    "REQUIRED_PATH_FIELDS",
    "USER_DB",
    "find_broken_dbs",
    "identity_of",
    "load_package_db",
    "load_store",
    "parse_record",
    "render_record",
    "resolve_package_db",
    "write_store",
]
