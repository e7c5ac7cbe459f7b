"""Port for executing package version lookups against a registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from package_pruner.domain.versions import PackageQueryResult


@dataclass(frozen=True, slots=True)
class VersionsRequest:
    """Opaque description of a versions lookup, ready for an executor."""

    query: str
    variables: Mapping[str, str | int]
    headers: Mapping[str, str] = field(default_factory=dict)


class QueryExecutionError(RuntimeError):
    """Raised by executors when a lookup fails.

    ``messages`` holds the upstream error messages, which may be empty.
    """

    def __init__(self, messages: tuple[str, ...] = ()) -> None:
        super().__init__("; ".join(messages) or "query execution failed")
        self.messages = messages


@runtime_checkable
class VersionQueryExecutor(Protocol):
    """Executes a versions request and returns the structured result."""

    async def execute(
        self,
        credential: str,
        request: VersionsRequest,
        extra_headers: Mapping[str, str] | None = None,
    ) -> PackageQueryResult: ...


__all__ = ["QueryExecutionError", "VersionQueryExecutor", "VersionsRequest"]
