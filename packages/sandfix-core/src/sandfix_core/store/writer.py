"""Write repaired stores back to disk, one record file per package."""

from __future__ import annotations

import logging
from pathlib import Path

from sandfix_core.config.models import StoreConfig
from sandfix_core.errors import StoreIOError
from sandfix_core.store.conffile import render_record
from sandfix_core.store.models import PackageStore

logger = logging.getLogger(__name__)


def write_store(
    store: PackageStore,
    target: str | Path | None = None,
    config: StoreConfig | None = None,
    *,
    dry_run: bool = False,
) -> list[Path]:
    """Write each record of *store* to ``<target>/<id><record_suffix>``.

    *target* defaults to the store's own location. Returns the paths
    written (or, with *dry_run*, the paths that would be written).
    """
    config = config or StoreConfig()
    target_dir = Path(target if target is not None else store.location or "")
    if target is None and store.location is None:
        raise ValueError("store has no location and no target was given")

    written: list[Path] = []
    for record in store:
        dest = target_dir / f"{record.id}{config.record_suffix}"
        if dry_run:
            logger.debug("dry-run: would write %s", dest)
        else:
            try:
                dest.write_text(render_record(record), encoding="utf-8")
            except OSError as e:
                raise StoreIOError(str(dest), e) from e
            logger.debug("wrote %s", dest)
        written.append(dest)
    return written
