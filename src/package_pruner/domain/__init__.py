"""Version selection domain."""

from __future__ import annotations

from .errors import PackageNotFoundError, VersionQueryError, VersionSelectionError
from .reconciler import reconcile, select_deletable
from .versions import (
    CountMismatch,
    PackageQueryResult,
    PackageVersions,
    QueryFailure,
    QueryOutcome,
    SelectionReport,
    VersionListing,
    VersionLookup,
    VersionRef,
)

__all__ = [
    "CountMismatch",
    "PackageNotFoundError",
    "PackageQueryResult",
    "PackageVersions",
    "QueryFailure",
    "QueryOutcome",
    "SelectionReport",
    "VersionListing",
    "VersionLookup",
    "VersionQueryError",
    "VersionRef",
    "VersionSelectionError",
    "reconcile",
    "select_deletable",
]
