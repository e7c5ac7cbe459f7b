"""Public interface for the GitHub packages adapter."""

from __future__ import annotations

from .client import GitHubGraphQLClient
from .query import GET_VERSIONS_QUERY, PREVIEW_HEADERS, build_versions_request
from .schema import GetVersionsResponse, GetVersionsResponseInput
from .translator import parse_query_result

__all__ = [
    "GET_VERSIONS_QUERY",
    "PREVIEW_HEADERS",
    "GetVersionsResponse",
    "GetVersionsResponseInput",
    "GitHubGraphQLClient",
    "build_versions_request",
    "parse_query_result",
]
