"""End-to-end relocation of the package databases inside a sandbox."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field

from sandfix_core.config.models import SandfixConfig
from sandfix_core.errors import StoreNotFoundError, UnresolvedDependencyError
from sandfix_core.pathindex import DirectorySnapshot, PathIndex
from sandfix_core.repair import StoreRepair, repair_store
from sandfix_core.store import find_broken_dbs, load_package_db, load_store, write_store

logger = logging.getLogger(__name__)

RECACHE_HINT = (
    "Please run 'cabal sandbox hc-pkg recache' in the sandbox to update the package cache"
)


class StoreSummary(BaseModel):
    """What happened to one repaired database."""

    location: str
    records: int
    written: list[str] = Field(default_factory=list)


class RelocationReport(BaseModel):
    """Outcome of a successful relocation run."""

    root: str
    stores: list[StoreSummary] = Field(default_factory=list)
    trusted: list[str] = Field(default_factory=list)
    dry_run: bool = False


def relocate(
    root: str | Path,
    config: SandfixConfig,
    pkg_dir: str | None = None,
    package_dbs: Sequence[str] = (),
    *,
    dry_run: bool = False,
) -> RelocationReport:
    """Repair every package database under *root* and write it back.

    1. Locates the sandbox database(s) and loads the trusted stores named by
       *package_dbs* (``config.store.default_package_dbs`` when empty).
    2. Snapshots *root* and builds the path index once.
    3. Repairs each database against itself and the trusted stores.
    4. Fails with every unresolved dependency before anything is written.
    5. Writes the repaired records, unless *dry_run*.
    """
    root = Path(root)
    broken_paths = find_broken_dbs(root, pkg_dir, config.store)
    if not broken_paths:
        raise StoreNotFoundError(str(root))

    selectors = list(package_dbs) or list(config.store.default_package_dbs)
    logger.info("Reading trusted package DB(s): %s", ", ".join(selectors))
    trusted = [load_package_db(s, config.store) for s in selectors]

    logger.info("Reading sandbox package DB(s)")
    broken = [load_store(p, config.store) for p in broken_paths]

    logger.info("Constructing path tree of %s", root)
    snapshot = DirectorySnapshot.build(
        root,
        ignore_patterns=config.snapshot.ignore_patterns,
        follow_symlinks=config.snapshot.follow_symlinks,
    )
    index = PathIndex.build(snapshot)

    logger.info("Fixing sandbox package DB(s)")
    repairs: list[StoreRepair] = [repair_store(store, trusted, index) for store in broken]

    unresolved = set().union(*(r.unresolved for r in repairs))
    if unresolved:
        raise UnresolvedDependencyError(unresolved)

    report = RelocationReport(
        root=snapshot.root,
        trusted=[s.location or "" for s in trusted],
        dry_run=dry_run,
    )
    for repair in repairs:
        written = write_store(repair.store, config=config.store, dry_run=dry_run)
        report.stores.append(StoreSummary(
            location=repair.store.location or "",
            records=len(repair.store),
            written=[str(p) for p in written],
        ))
    return report
