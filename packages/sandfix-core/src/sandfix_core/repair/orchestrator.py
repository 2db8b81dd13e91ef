"""Apply record repair to a whole store."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sandfix_core.pathindex import PathIndex
from sandfix_core.repair.engine import repair_record
from sandfix_core.store.models import PackageIdentity, PackageStore

logger = logging.getLogger(__name__)


@dataclass
class StoreRepair:
    """Repaired copy of a store plus every dependency no store could provide."""

    store: PackageStore
    unresolved: frozenset[PackageIdentity] = field(default_factory=frozenset)

    @property
    def ok(self) -> bool:
        return not self.unresolved


def repair_store(
    broken: PackageStore,
    trusted_stores: Sequence[PackageStore],
    index: PathIndex,
) -> StoreRepair:
    """Repair every record of *broken*.

    The unrepaired *broken* store is the peer store for every record, so
    the result does not depend on processing order. Record-level errors
    propagate unchanged; nothing is written here.
    """
    repaired = []
    unresolved: set[PackageIdentity] = set()
    for record in broken:
        result = repair_record(record, broken, trusted_stores, index)
        repaired.append(result.record)
        unresolved.update(result.unresolved)

    logger.debug(
        "repaired %d record(s) in %s, %d unresolved",
        len(repaired), broken.location, len(unresolved),
    )
    return StoreRepair(
        store=PackageStore(repaired, location=broken.location),
        unresolved=frozenset(unresolved),
    )
