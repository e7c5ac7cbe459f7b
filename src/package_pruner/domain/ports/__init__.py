"""Domain port definitions for adapters."""

from __future__ import annotations

from .querying import QueryExecutionError, VersionQueryExecutor, VersionsRequest

__all__ = ["QueryExecutionError", "VersionQueryExecutor", "VersionsRequest"]
