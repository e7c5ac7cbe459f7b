"""HTTP client for the GitHub GraphQL API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from package_pruner.adapters.http_resilience import ResilientClient, default_client_factory
from package_pruner.config.github import DEFAULT_GITHUB_API_URL, default_github_resilience
from package_pruner.domain.ports.querying import QueryExecutionError, VersionQueryExecutor

from .schema import GetVersionsResponse, RestErrorPayload
from .translator import parse_query_result

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from package_pruner.config.http_resilience import ResilienceConfig
    from package_pruner.domain.ports.querying import VersionsRequest
    from package_pruner.domain.versions import PackageQueryResult

log = getLogger(__name__)


def _error_messages(response: httpx.Response) -> tuple[str, ...]:
    try:
        payload = RestErrorPayload.model_validate(response.json())
    except (ValueError, ValidationError):
        return (f"HTTP {response.status_code} {response.reason_phrase}".strip(),)
    messages = tuple(error.message for error in payload.errors)
    if payload.message:
        messages = (payload.message, *messages)
    return messages or (f"HTTP {response.status_code} {response.reason_phrase}".strip(),)


@dataclass(slots=True)
class GitHubGraphQLClient:
    """Executes versions requests against ``{base_url}/graphql``.

    Entering the client opens one ``ResilientClient`` that every ``execute``
    call shares until exit, so concurrent lookups go through a single rate
    limiter. Outside the context each call opens and closes its own client.
    """

    resilience: ResilienceConfig = field(default_factory=default_github_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    @property
    def graphql_url(self) -> str:
        base_url = self.resilience.base_url or DEFAULT_GITHUB_API_URL
        return f"{base_url.rstrip('/')}/graphql"

    async def __aenter__(self) -> GitHubGraphQLClient:
        if self._client is None:
            self._client = self.client_factory(self.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def execute(
        self,
        credential: str,
        request: VersionsRequest,
        extra_headers: Mapping[str, str] | None = None,
    ) -> PackageQueryResult:
        headers = {"Authorization": f"bearer {credential}", **request.headers}
        if extra_headers:
            headers.update(extra_headers)
        body = {"query": request.query, "variables": dict(request.variables)}

        if self._client is not None:
            response = await self._post(self._client, body, headers)
        else:
            async with self.client_factory(self.resilience) as client:
                response = await self._post(client, body, headers)

        return self._parse_response(response)

    async def _post(
        self,
        client: ResilientClient,
        body: dict[str, object],
        headers: dict[str, str],
    ) -> httpx.Response:
        try:
            return await client.post(self.graphql_url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            log.error(f"GitHub GraphQL request failed: {exc}")
            raise QueryExecutionError((str(exc),)) from exc

    def _parse_response(self, response: httpx.Response) -> PackageQueryResult:
        if response.is_error:
            messages = _error_messages(response)
            log.error(f"GitHub GraphQL API error {response.status_code}: {messages[0]}")
            raise QueryExecutionError(messages)

        try:
            payload = GetVersionsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise QueryExecutionError(("Unexpected GitHub GraphQL response payload",)) from exc

        if payload.errors:
            messages = tuple(error.message for error in payload.errors)
            log.error(f"GitHub GraphQL query returned errors: {'; '.join(messages)}")
            raise QueryExecutionError(messages)

        return parse_query_result(payload)


if TYPE_CHECKING:
    _executor_check: VersionQueryExecutor = GitHubGraphQLClient()
