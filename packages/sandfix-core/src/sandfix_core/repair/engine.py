"""Repair a single package record against a relocated tree."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from sandfix_core.errors import AmbiguousPathError, UnresolvedPathError
from sandfix_core.pathindex import PathIndex
from sandfix_core.store.models import (
    BEST_EFFORT_PATH_FIELDS,
    REQUIRED_PATH_FIELDS,
    PackageIdentity,
    PackageRecord,
    PackageStore,
    identity_of,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordRepair:
    """A repaired record and the dependencies that could not be found."""

    record: PackageRecord
    unresolved: tuple[PackageIdentity, ...] = ()


def resolve_dependency(
    installed_id: str,
    peer_store: PackageStore,
    trusted_stores: Sequence[PackageStore],
) -> str | PackageIdentity:
    """Return the id to depend on, or the identity if nothing provides it.

    Raises MalformedIdError if *installed_id* does not embed an identity.
    """
    identity = identity_of(installed_id)
    if installed_id in peer_store:
        return installed_id
    for store in trusted_stores:
        found = store.lookup_identity(identity)
        if found is not None:
            return found.id
    return identity


def _find_one_or_fail(index: PathIndex, package_id: str, field: str, path: str) -> str:
    candidates = index.resolve(path)
    if not candidates:
        raise UnresolvedPathError(package_id, field, path)
    if len(candidates) > 1:
        raise AmbiguousPathError(package_id, field, path, candidates)
    return candidates[0]


def _find_first_or_root(index: PathIndex, path: str) -> str:
    candidates = index.resolve(path)
    return candidates[0] if candidates else index.root


def repair_record(
    record: PackageRecord,
    peer_store: PackageStore,
    trusted_stores: Sequence[PackageStore],
    index: PathIndex,
) -> RecordRepair:
    """Rewrite dependencies and path fields of *record*.

    Dependencies missing from both *peer_store* and *trusted_stores* are
    dropped and reported in ``unresolved``. Required path fields raise
    UnresolvedPathError / AmbiguousPathError; best-effort fields fall back
    to the index root.
    """
    depends: list[str] = []
    unresolved: list[PackageIdentity] = []
    for dep in record.depends:
        resolved = resolve_dependency(dep, peer_store, trusted_stores)
        if isinstance(resolved, PackageIdentity):
            logger.debug("%s: dependency %s not found", record.id, resolved)
            unresolved.append(resolved)
        else:
            depends.append(resolved)

    changes: dict[str, tuple[str, ...]] = {"depends": tuple(depends)}
    for attr, field in REQUIRED_PATH_FIELDS.items():
        changes[attr] = tuple(
            _find_one_or_fail(index, record.id, field, p) for p in getattr(record, attr)
        )
    for attr in BEST_EFFORT_PATH_FIELDS:
        changes[attr] = tuple(_find_first_or_root(index, p) for p in getattr(record, attr))

    return RecordRepair(record=replace(record, **changes), unresolved=tuple(unresolved))
