from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from package_pruner.adapters.http_resilience import ResilientClient
from package_pruner.domain.versions import VersionLookup

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from package_pruner.config.http_resilience import ResilienceConfig

type VersionsPayload = dict[str, object]
type Handler = Callable[[httpx.Request], httpx.Response]


def _connection(ids: Sequence[str]) -> dict[str, object]:
    return {"edges": [{"node": {"id": vid, "version": f"1.0.{vid}"}} for vid in ids]}


def build_versions_payload(
    *,
    name: str = "core-lib",
    keep: Sequence[str] = (),
    last: Sequence[str] = (),
) -> VersionsPayload:
    return {
        "data": {
            "repository": {
                "packages": {
                    "edges": [
                        {
                            "node": {
                                "name": name,
                                "keepVersions": _connection(keep),
                                "lastVersions": _connection(last),
                            }
                        }
                    ]
                }
            }
        }
    }


@pytest.fixture
def versions_payload() -> Callable[..., VersionsPayload]:
    return build_versions_payload


@pytest.fixture
def empty_packages_payload() -> VersionsPayload:
    return {"data": {"repository": {"packages": {"edges": []}}}}


@pytest.fixture
def lookup() -> VersionLookup:
    return VersionLookup(
        owner="acme",
        repo="widgets",
        package_name="core-lib",
        num_versions=5,
        keep_versions=3,
    )


@pytest.fixture
def make_client_factory() -> Callable[[Handler], Callable[[ResilienceConfig], ResilientClient]]:
    def make(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
        def factory(resilience: ResilienceConfig) -> ResilientClient:
            return ResilientClient(resilience, transport=httpx.MockTransport(handler))

        return factory

    return make
