"""Translate GitHub GraphQL payloads into domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from package_pruner.domain.versions import PackageQueryResult, PackageVersions, VersionRef

from .schema import GetVersionsResponse, GetVersionsResponseInput

if TYPE_CHECKING:
    from package_pruner.domain.versions import VersionListing

    from .schema import PackageNode, VersionConnection


def _ensure_response(payload: GetVersionsResponseInput) -> GetVersionsResponse:
    if isinstance(payload, GetVersionsResponse):
        return payload
    return GetVersionsResponse.model_validate(payload)


def _to_listing(connection: VersionConnection) -> VersionListing:
    return tuple(
        VersionRef(id=edge.node.id, version=edge.node.version) for edge in connection.edges
    )


def _to_package(node: PackageNode) -> PackageVersions:
    return PackageVersions(
        name=node.name,
        keep=_to_listing(node.keep_versions),
        candidates=_to_listing(node.last_versions),
    )


def parse_query_result(payload: GetVersionsResponseInput) -> PackageQueryResult:
    """Build a ``PackageQueryResult``; a missing repository yields no packages."""

    response = _ensure_response(payload)
    if response.data is None or response.data.repository is None:
        return PackageQueryResult()
    edges = response.data.repository.packages.edges
    return PackageQueryResult(packages=tuple(_to_package(edge.node) for edge in edges))
