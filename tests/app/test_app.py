from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

import httpx
import pytest

from package_pruner import app as app_module
from package_pruner.adapters.github import GitHubGraphQLClient
from package_pruner.config import GitHubConfig, RateLimit, default_github_resilience
from package_pruner.domain.errors import PackageNotFoundError, VersionQueryError
from package_pruner.domain.ports.querying import QueryExecutionError, VersionsRequest
from package_pruner.domain.versions import (
    PackageQueryResult,
    PackageVersions,
    VersionLookup,
    VersionRef,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from package_pruner.adapters.http_resilience import ResilientClient
    from package_pruner.config.http_resilience import ResilienceConfig

    ClientFactoryMaker = Callable[
        [Callable[[httpx.Request], httpx.Response]],
        Callable[[ResilienceConfig], ResilientClient],
    ]


def _refs(*ids: str) -> tuple[VersionRef, ...]:
    return tuple(VersionRef(id=vid, version=vid) for vid in ids)


@dataclass
class FakeExecutor:
    results: dict[str, PackageQueryResult | Exception] = field(default_factory=dict)
    calls: list[tuple[str, VersionsRequest, Mapping[str, str] | None]] = field(
        default_factory=list
    )

    async def execute(
        self,
        credential: str,
        request: VersionsRequest,
        extra_headers: Mapping[str, str] | None = None,
    ) -> PackageQueryResult:
        self.calls.append((credential, request, extra_headers))
        result = self.results[str(request.variables["package"])]
        if isinstance(result, Exception):
            raise result
        return result


def _lookup(package_name: str = "core-lib", *, num: int = 5, keep: int = 3) -> VersionLookup:
    return VersionLookup(
        owner="acme",
        repo="widgets",
        package_name=package_name,
        num_versions=num,
        keep_versions=keep,
    )


def _package_result(name: str, keep: tuple[str, ...], last: tuple[str, ...]) -> PackageQueryResult:
    return PackageQueryResult(
        packages=(PackageVersions(name=name, keep=_refs(*keep), candidates=_refs(*last)),)
    )


def test_find_deletable_versions_builds_request_and_reconciles() -> None:
    executor = FakeExecutor(
        results={"core-lib": _package_result("core-lib", ("v10", "v9", "v8"), ("v1", "v2"))}
    )

    report = asyncio.run(
        app_module.find_deletable_versions(_lookup(num=2), executor=executor, credential="tok")
    )

    assert report.ids == ("v1", "v2")
    credential, request, extra_headers = executor.calls[0]
    assert credential == "tok"
    assert request.variables["last"] == 2
    assert request.variables["keep"] == 3
    assert request.headers == {"Accept": "application/vnd.github.packages-preview+json"}
    assert extra_headers is None


def test_find_deletable_versions_logs_count_mismatch(caplog: pytest.LogCaptureFixture) -> None:
    executor = FakeExecutor(
        results={"core-lib": _package_result("core-lib", ("v10",), ("v1", "v2", "v3"))}
    )

    with caplog.at_level(logging.INFO, logger="package_pruner.app"):
        report = asyncio.run(
            app_module.find_deletable_versions(_lookup(), executor=executor, credential="tok")
        )

    assert report.ids == ("v1", "v2", "v3")
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert [record.getMessage() for record in warnings] == [
        "number of versions requested was: 5, but found: 3"
    ]
    assert any("v10" in record.getMessage() for record in caplog.records)


def test_find_deletable_versions_converts_executor_failure() -> None:
    executor = FakeExecutor(results={"core-lib": QueryExecutionError(("bad token",))})

    with pytest.raises(VersionQueryError, match="bad token"):
        asyncio.run(
            app_module.find_deletable_versions(_lookup(), executor=executor, credential="x")
        )


def test_find_deletable_versions_without_upstream_messages() -> None:
    executor = FakeExecutor(results={"core-lib": QueryExecutionError()})

    with pytest.raises(VersionQueryError, match="verify input parameters are correct"):
        asyncio.run(
            app_module.find_deletable_versions(_lookup(), executor=executor, credential="x")
        )


def test_find_deletable_versions_raises_when_package_missing() -> None:
    executor = FakeExecutor(results={"core-lib": PackageQueryResult()})

    with pytest.raises(PackageNotFoundError):
        asyncio.run(
            app_module.find_deletable_versions(_lookup(), executor=executor, credential="x")
        )


def test_batched_lookups_reconcile_independently() -> None:
    executor = FakeExecutor(
        results={
            "core-lib": _package_result("core-lib", ("c3",), ("c1", "c2", "c3")),
            "cli": _package_result("cli", ("x9",), ("x1",)),
        }
    )
    lookups = [_lookup("core-lib", num=3, keep=1), _lookup("cli", num=1, keep=1)]

    reports = asyncio.run(
        app_module.find_deletable_versions_for_packages(
            lookups, executor=executor, credential="t"
        )
    )

    assert reports["core-lib"].ids == ("c1", "c2")
    assert reports["core-lib"].diagnostics
    assert reports["cli"].ids == ("x1",)
    assert reports["cli"].diagnostics == ()


def test_batched_lookups_propagate_failures() -> None:
    executor = FakeExecutor(
        results={
            "core-lib": _package_result("core-lib", (), ("c1",)),
            "missing": PackageQueryResult(),
        }
    )
    lookups = [_lookup("core-lib", num=1), _lookup("missing", num=1)]

    with pytest.raises(PackageNotFoundError, match="package: missing not found"):
        asyncio.run(
            app_module.find_deletable_versions_for_packages(
                lookups, executor=executor, credential="t"
            )
        )


def test_select_deletable_versions_uses_config_token() -> None:
    executor = FakeExecutor(results={"core-lib": _package_result("core-lib", (), ("v1",))})
    config = GitHubConfig(token="cfg-token", resilience=default_github_resilience())

    reports = app_module.select_deletable_versions(
        [_lookup(num=1)], config=config, executor=executor
    )

    assert reports["core-lib"].ids == ("v1",)
    assert executor.calls[0][0] == "cfg-token"


def test_batched_lookups_share_the_rate_limit(
    make_client_factory: ClientFactoryMaker,
    versions_payload: Callable[..., dict[str, object]],
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        package = json.loads(request.content)["variables"]["package"]
        return httpx.Response(200, json=versions_payload(name=package, last=(f"{package}-1",)))

    created: list[ResilienceConfig] = []
    factory = make_client_factory(handler)

    def counting_factory(resilience: ResilienceConfig) -> ResilientClient:
        created.append(resilience)
        return factory(resilience)

    resilience = replace(
        default_github_resilience(), ratelimit=RateLimit(max_calls=1, per_seconds=0.2)
    )
    executor = GitHubGraphQLClient(resilience=resilience, client_factory=counting_factory)
    lookups = [_lookup(name, num=1, keep=0) for name in ("a", "b", "c")]

    started = time.monotonic()
    reports = asyncio.run(
        app_module.find_deletable_versions_for_packages(
            lookups, executor=executor, credential="t"
        )
    )
    elapsed = time.monotonic() - started

    assert len(created) == 1
    assert elapsed >= 0.35
    assert {name: report.ids for name, report in reports.items()} == {
        "a": ("a-1",),
        "b": ("b-1",),
        "c": ("c-1",),
    }
