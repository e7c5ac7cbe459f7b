"""Decide which of the oldest package versions may be deleted.

The lookup returns two independently paginated windows over the same version
collection: the newest ``keep_versions`` entries and the oldest
``num_versions`` entries. When the collection is small the windows overlap, so
any candidate that also appears in the keep window is dropped. Matching is by
version id only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import PackageNotFoundError, VersionQueryError
from .versions import CountMismatch, QueryFailure, SelectionReport

if TYPE_CHECKING:
    from .versions import PackageVersions, QueryOutcome, VersionListing, VersionLookup


def reconcile(outcome: QueryOutcome, lookup: VersionLookup) -> SelectionReport:
    """Turn a lookup outcome into a selection report.

    Raises ``VersionQueryError`` for a failed query and ``PackageNotFoundError``
    when no package matched. A count mismatch is reported through
    ``SelectionReport.diagnostics`` and never raises.
    """

    if isinstance(outcome, QueryFailure):
        raise VersionQueryError(outcome.messages)

    package = outcome.package
    if package is None:
        raise PackageNotFoundError(
            package_name=lookup.package_name,
            owner=lookup.owner,
            repo=lookup.repo,
        )

    deletable = select_deletable(package)
    diagnostics: tuple[CountMismatch, ...] = ()
    if len(deletable) != lookup.num_versions:
        diagnostics = (CountMismatch(requested=lookup.num_versions, found=len(deletable)),)

    return SelectionReport(
        package_name=package.name,
        versions=deletable,
        kept=package.keep,
        diagnostics=diagnostics,
    )


def select_deletable(package: PackageVersions) -> VersionListing:
    """Return the candidates whose id is not in the keep window, in order."""

    keep_ids = {version.id for version in package.keep}
    return tuple(version for version in package.candidates if version.id not in keep_ids)
