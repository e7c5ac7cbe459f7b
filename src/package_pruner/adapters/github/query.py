"""GraphQL request construction for package version lookups."""

from __future__ import annotations

from package_pruner.config.github import PACKAGES_PREVIEW_MEDIA_TYPE
from package_pruner.domain.ports.querying import VersionsRequest

# keepVersions reads from the head of the (newest-first) version collection,
# lastVersions from its tail, so the two windows can overlap.
GET_VERSIONS_QUERY = """
  query getVersions($owner: String!, $repo: String!, $package: String!, $last: Int!, $keep: Int!) {
    repository(owner: $owner, name: $repo) {
      packages(first: 1, names: [$package]) {
        edges {
          node {
            name
            keepVersions: versions(first: $keep) {
              edges {
                node {
                  id
                  version
                }
              }
            }
            lastVersions: versions(last: $last) {
              edges {
                node {
                  id
                  version
                }
              }
            }
          }
        }
      }
    }
  }"""

PREVIEW_HEADERS: dict[str, str] = {"Accept": PACKAGES_PREVIEW_MEDIA_TYPE}


def build_versions_request(
    owner: str,
    repo: str,
    package_name: str,
    num_versions: int,
    keep_versions: int,
) -> VersionsRequest:
    """Describe a lookup of the newest ``keep_versions`` and oldest ``num_versions``.

    Values are passed through unchecked; the API rejects invalid ones.
    """

    return VersionsRequest(
        query=GET_VERSIONS_QUERY,
        variables={
            "owner": owner,
            "repo": repo,
            "package": package_name,
            "last": num_versions,
            "keep": keep_versions,
        },
        headers=dict(PREVIEW_HEADERS),
    )
