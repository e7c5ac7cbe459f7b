"""Errors raised while selecting package versions for deletion."""

from __future__ import annotations

QUERY_FAILED_MESSAGE = "query for oldest version failed."
VERIFY_INPUT_MESSAGE = "verify input parameters are correct"


class VersionSelectionError(RuntimeError):
    """Base class for failures that abort a version selection."""


class VersionQueryError(VersionSelectionError):
    """Raised when the versions query itself failed."""

    def __init__(self, messages: tuple[str, ...] = ()) -> None:
        detail = messages[0] if messages else VERIFY_INPUT_MESSAGE
        super().__init__(f"{QUERY_FAILED_MESSAGE} {detail}")
        self.messages = messages


class PackageNotFoundError(VersionSelectionError):
    """Raised when the lookup matched no package."""

    def __init__(self, *, package_name: str, owner: str, repo: str) -> None:
        super().__init__(f"package: {package_name} not found for owner: {owner} in repo: {repo}")
        self.package_name = package_name
        self.owner = owner
        self.repo = repo
