"""Exception types raised while repairing a relocated package store."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sandfix_core.store.models import PackageIdentity


class SandfixError(Exception):
    """Base class for every failure the repair run reports to the user."""


class MalformedIdError(SandfixError):
    """An installed package id does not embed a parsable package identity."""

    def __init__(self, installed_id: str) -> None:
        self.installed_id = installed_id
        super().__init__(f"Failed to parse installed package id {installed_id}")


class MalformedRecordError(SandfixError):
    """A record file could not be parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Malformed package record {source}: {reason}")


class UnresolvedPathError(SandfixError):
    """A required path field matched nothing in the live tree."""

    def __init__(self, package_id: str, field: str, path: str) -> None:
        self.package_id = package_id
        self.field = field
        self.path = path
        super().__init__(
            f"Could not find sandbox path of {path} ({field} of {package_id})"
        )


class AmbiguousPathError(SandfixError):
    """A required path field matched more than one live directory."""

    def __init__(
        self, package_id: str, field: str, path: str, candidates: list[str]
    ) -> None:
        self.package_id = package_id
        self.field = field
        self.path = path
        self.candidates = list(candidates)
        super().__init__(
            f"Multiple possible sandbox paths of {path} ({field} of {package_id}): "
            + ", ".join(self.candidates)
        )


class UnresolvedDependencyError(SandfixError):
    """Some dependencies resolve against neither the sandbox nor a trusted store."""

    def __init__(self, identities: Iterable[PackageIdentity]) -> None:
        self.identities = sorted(set(identities))
        names = ", ".join(str(i) for i in self.identities)
        super().__init__(
            f"Could not find package(s) {names} in either the sandbox or global DB. "
            "As a last resort try installing them explicitly (these specific "
            "versions) into the global DB with --global"
        )


class StoreNotFoundError(SandfixError):
    """No package store exists at the requested location."""

    def __init__(self, location: str, reason: str | None = None) -> None:
        self.location = str(location)
        msg = f"Unable to find package database in {self.location}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class StoreIOError(SandfixError):
    """Filesystem access failed while reading or writing a store or tree."""

    def __init__(self, location: str, cause: OSError) -> None:
        self.location = str(location)
        super().__init__(f"I/O error at {self.location}: {cause}")
        self.__cause__ = cause
