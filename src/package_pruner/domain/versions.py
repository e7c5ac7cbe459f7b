"""Value types describing package version listings and selection outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

type VersionListing = tuple[VersionRef, ...]


@dataclass(frozen=True, slots=True)
class VersionRef:
    """A single package version.

    Identity is carried by ``id``; ``version`` is the human-readable label and
    takes no part in equality or hashing.
    """

    id: str
    version: str = field(compare=False)


@dataclass(frozen=True, slots=True)
class PackageVersions:
    """Both version windows returned for one package."""

    name: str
    keep: VersionListing = ()
    candidates: VersionListing = ()


@dataclass(frozen=True, slots=True)
class PackageQueryResult:
    """Structured result of a package lookup.

    The lookup selects at most one package by name, so ``packages`` holds zero
    or one entries.
    """

    packages: tuple[PackageVersions, ...] = ()

    @property
    def package(self) -> PackageVersions | None:
        return self.packages[0] if self.packages else None


@dataclass(frozen=True, slots=True)
class QueryFailure:
    """A failed lookup, carrying whatever messages the upstream API returned."""

    messages: tuple[str, ...] = ()


type QueryOutcome = PackageQueryResult | QueryFailure


@dataclass(frozen=True, slots=True, kw_only=True)
class VersionLookup:
    """Parameters of one oldest-versions lookup."""

    owner: str
    repo: str
    package_name: str
    num_versions: int
    keep_versions: int


@dataclass(frozen=True, slots=True, kw_only=True)
class CountMismatch:
    """Requested and actual deletion-candidate counts differ."""

    requested: int
    found: int

    @property
    def message(self) -> str:
        return f"number of versions requested was: {self.requested}, but found: {self.found}"


@dataclass(frozen=True, slots=True, kw_only=True)
class SelectionReport:
    """Versions that are safe to delete, plus non-fatal diagnostics."""

    package_name: str
    versions: VersionListing
    kept: VersionListing = ()
    diagnostics: tuple[CountMismatch, ...] = ()

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(version.id for version in self.versions)


__all__ = [
    "CountMismatch",
    "PackageQueryResult",
    "PackageVersions",
    "QueryFailure",
    "QueryOutcome",
    "SelectionReport",
    "VersionListing",
    "VersionLookup",
    "VersionRef",
]
