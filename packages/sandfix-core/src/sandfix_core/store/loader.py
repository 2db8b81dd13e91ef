"""Load package stores from ``*.conf.d`` directories."""

from __future__ import annotations

import logging
from pathlib import Path

from sandfix_core.config.models import StoreConfig
from sandfix_core.errors import MalformedRecordError, StoreIOError, StoreNotFoundError
from sandfix_core.store.conffile import parse_record
from sandfix_core.store.models import PackageRecord, PackageStore

logger = logging.getLogger(__name__)


def _read_record(f: Path) -> PackageRecord:
    try:
        text = f.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedRecordError(str(f), "not valid UTF-8") from e
    return parse_record(text, source=str(f))


def load_store(path: str | Path, config: StoreConfig | None = None) -> PackageStore:
    """Read every record file in the directory *path*, in name order."""
    config = config or StoreConfig()
    path = Path(path)
    if not path.is_dir():
        raise StoreNotFoundError(str(path))

    try:
        files = sorted(path.glob(f"*{config.record_suffix}"))
        records = [_read_record(f) for f in files]
    except OSError as e:
        raise StoreIOError(str(path), e) from e

    logger.debug("loaded %d record(s) from %s", len(records), path)
    return PackageStore(records, location=str(path))
