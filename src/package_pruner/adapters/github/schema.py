"""Pydantic models describing the GitHub GraphQL payloads."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class VersionNode(GitHubBaseModel):
    id: str
    version: str


class VersionEdge(GitHubBaseModel):
    node: VersionNode


class VersionConnection(GitHubBaseModel):
    edges: list[VersionEdge] = Field(default_factory=list)


class PackageNode(GitHubBaseModel):
    name: str
    keep_versions: VersionConnection = Field(
        default_factory=VersionConnection, alias="keepVersions"
    )
    last_versions: VersionConnection = Field(
        default_factory=VersionConnection, alias="lastVersions"
    )


class PackageEdge(GitHubBaseModel):
    node: PackageNode


class PackageConnection(GitHubBaseModel):
    edges: list[PackageEdge] = Field(default_factory=list)


class RepositoryPayload(GitHubBaseModel):
    packages: PackageConnection = Field(default_factory=PackageConnection)


class GetVersionsData(GitHubBaseModel):
    repository: RepositoryPayload | None = None


class GraphQLErrorPayload(GitHubBaseModel):
    message: str
    type: str | None = None


class GetVersionsResponse(GitHubBaseModel):
    data: GetVersionsData | None = None
    errors: list[GraphQLErrorPayload] = Field(default_factory=list)


class RestErrorPayload(GitHubBaseModel):
    """Error body returned with non-2xx statuses, e.g. ``{"message": "Bad credentials"}``."""

    message: str | None = None
    errors: list[GraphQLErrorPayload] = Field(default_factory=list)


GetVersionsResponseInput = GetVersionsResponse | Mapping[str, object]
