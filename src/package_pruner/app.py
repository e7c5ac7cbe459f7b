"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from package_pruner.adapters.github import GitHubGraphQLClient, build_versions_request
from package_pruner.config import get_github_config
from package_pruner.domain.ports.querying import QueryExecutionError
from package_pruner.domain.reconciler import reconcile
from package_pruner.domain.versions import QueryFailure

if TYPE_CHECKING:
    from collections.abc import Sequence

    from package_pruner.config import GitHubConfig
    from package_pruner.domain.ports.querying import VersionQueryExecutor
    from package_pruner.domain.versions import QueryOutcome, SelectionReport, VersionLookup


log = getLogger(__name__)


async def find_deletable_versions(
    lookup: VersionLookup,
    *,
    executor: VersionQueryExecutor,
    credential: str,
) -> SelectionReport:
    """Query the oldest versions of a package and select those safe to delete."""

    request = build_versions_request(
        lookup.owner,
        lookup.repo,
        lookup.package_name,
        lookup.num_versions,
        lookup.keep_versions,
    )

    outcome: QueryOutcome
    try:
        outcome = await executor.execute(credential, request)
    except QueryExecutionError as exc:
        outcome = QueryFailure(messages=exc.messages)

    report = reconcile(outcome, lookup)

    log.info(
        "Keeping %s newest version(s) of %s: %s",
        lookup.keep_versions,
        report.package_name,
        [version.id for version in report.kept],
    )
    for diagnostic in report.diagnostics:
        log.warning(diagnostic.message)
    log.debug("Deletion candidates for %s: %s", report.package_name, list(report.ids))
    return report


async def find_deletable_versions_for_packages(
    lookups: Sequence[VersionLookup],
    *,
    executor: VersionQueryExecutor,
    credential: str,
) -> dict[str, SelectionReport]:
    """Run several lookups concurrently; the first failure propagates.

    An executor that is an async context manager is entered once around the
    whole batch so every lookup shares its connection and rate limit.
    """

    async with AsyncExitStack() as stack:
        if isinstance(executor, AbstractAsyncContextManager):
            await stack.enter_async_context(executor)
        reports = await asyncio.gather(
            *(
                find_deletable_versions(lookup, executor=executor, credential=credential)
                for lookup in lookups
            )
        )
    return {
        lookup.package_name: report for lookup, report in zip(lookups, reports, strict=True)
    }


def select_deletable_versions(
    lookups: Sequence[VersionLookup],
    *,
    config: GitHubConfig | None = None,
    executor: VersionQueryExecutor | None = None,
) -> dict[str, SelectionReport]:
    """Synchronous entry point using the configured GitHub adapter."""

    effective_config = config or get_github_config()
    effective_executor = executor or GitHubGraphQLClient(resilience=effective_config.resilience)
    log.info(
        "Selecting deletable versions: packages=%s",
        [f"{lookup.owner}/{lookup.repo}:{lookup.package_name}" for lookup in lookups],
    )
    return asyncio.run(
        find_deletable_versions_for_packages(
            lookups,
            executor=effective_executor,
            credential=effective_config.token,
        )
    )
