"""Data models for package identities, records, and stores."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from sandfix_core.errors import MalformedIdError

# "<identity>-<32 char hash>"
HASH_SUFFIX_LEN = 32

_NAME_PART_RE = re.compile(r"[A-Za-z0-9]*[A-Za-z][A-Za-z0-9]*")
_VERSION_RE = re.compile(r"\d+(\.\d+)*")

# Path-valued record fields, keyed by attribute name -> on-disk field name.
REQUIRED_PATH_FIELDS: dict[str, str] = {
    "import_dirs": "import-dirs",
    "library_dirs": "library-dirs",
    "include_dirs": "include-dirs",
}
BEST_EFFORT_PATH_FIELDS: dict[str, str] = {
    "framework_dirs": "framework-dirs",
    "haddock_interfaces": "haddock-interfaces",
    "haddock_html": "haddock-html",
}
PATH_FIELDS: dict[str, str] = {**REQUIRED_PATH_FIELDS, **BEST_EFFORT_PATH_FIELDS}


@dataclass(frozen=True, order=True)
class PackageIdentity:
    """A package name plus version, e.g. ``text-1.2.3.0``.

    Sorts by name, then numerically by version.
    """

    name: str
    version: tuple[int, ...]

    @classmethod
    def parse(cls, text: str) -> PackageIdentity | None:
        """Parse ``name-version``; return None if *text* is not one."""
        name, sep, version = text.rpartition("-")
        if not sep or not _VERSION_RE.fullmatch(version):
            return None
        if not all(_NAME_PART_RE.fullmatch(part) for part in name.split("-")):
            return None
        return cls(name=name, version=tuple(int(v) for v in version.split(".")))

    def __str__(self) -> str:
        return f"{self.name}-{'.'.join(str(v) for v in self.version)}"


def identity_of(installed_id: str) -> PackageIdentity:
    """Strip the hash suffix from an installed package id and parse the rest."""
    identity = PackageIdentity.parse(installed_id[: -(HASH_SUFFIX_LEN + 1)])
    if identity is None:
        raise MalformedIdError(installed_id)
    return identity


@dataclass(frozen=True)
class PackageRecord:
    """Metadata for one installed package.

    Path fields and dependencies are typed; every other field is kept as raw
    text in *fields*. *field_order* remembers the original field layout.
    """

    id: str
    depends: tuple[str, ...] = ()
    import_dirs: tuple[str, ...] = ()
    library_dirs: tuple[str, ...] = ()
    include_dirs: tuple[str, ...] = ()
    framework_dirs: tuple[str, ...] = ()
    haddock_interfaces: tuple[str, ...] = ()
    haddock_html: tuple[str, ...] = ()
    fields: dict[str, str] = field(default_factory=dict, compare=False)
    field_order: tuple[str, ...] = field(default=(), compare=False)

    @property
    def source_identity(self) -> PackageIdentity | None:
        """Identity from the ``name``/``version`` fields, falling back to the id."""
        name = self.fields.get("name", "").strip()
        version = self.fields.get("version", "").strip()
        if name and version:
            parsed = PackageIdentity.parse(f"{name}-{version}")
            if parsed is not None:
                return parsed
        return PackageIdentity.parse(self.id[: -(HASH_SUFFIX_LEN + 1)])


class PackageStore:
    """Records keyed by installed package id, in load order."""

    def __init__(
        self,
        records: list[PackageRecord] | None = None,
        location: str | None = None,
    ) -> None:
        self.location = location
        self._records: dict[str, PackageRecord] = {}
        self._by_identity: dict[PackageIdentity, PackageRecord] = {}
        for record in records or ():
            self._records[record.id] = record
            identity = record.source_identity
            if identity is not None:
                self._by_identity.setdefault(identity, record)

    def __iter__(self) -> Iterator[PackageRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, installed_id: object) -> bool:
        return installed_id in self._records

    def get(self, installed_id: str) -> PackageRecord | None:
        return self._records.get(installed_id)

    def lookup_identity(self, identity: PackageIdentity) -> PackageRecord | None:
        """First record (in load order) whose source identity is *identity*."""
        return self._by_identity.get(identity)

    @property
    def ids(self) -> list[str]:
        return list(self._records)
