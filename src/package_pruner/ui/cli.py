from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from package_pruner.app import select_deletable_versions
from package_pruner.config import ConfigurationError, configure_logging, get_github_config
from package_pruner.domain.versions import VersionLookup

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import FrameType

    from package_pruner.config import GitHubConfig
    from package_pruner.domain.versions import SelectionReport

log = logging.getLogger(__name__)

DEFAULT_NUM_VERSIONS = 1
DEFAULT_KEEP_VERSIONS = 0


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List the oldest package versions that are safe to delete",
    )
    parser.add_argument(
        "--package",
        dest="packages",
        action="append",
        required=True,
        help="Package name to inspect (repeat for several packages)",
    )
    parser.add_argument(
        "--owner",
        type=str,
        help="Repository owner (defaults to the owner in GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--repo",
        type=str,
        help="Repository name (defaults to the name in GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--num-versions",
        type=int,
        default=DEFAULT_NUM_VERSIONS,
        help="Number of oldest versions to consider for deletion (default: %(default)s)",
    )
    parser.add_argument(
        "--keep-versions",
        type=int,
        default=DEFAULT_KEEP_VERSIONS,
        help="Number of newest versions that must never be deleted (default: %(default)s)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def _build_lookups(args: argparse.Namespace, config: GitHubConfig) -> list[VersionLookup]:
    if args.num_versions < 0:
        raise ValueError("--num-versions must be non-negative")
    if args.keep_versions < 0:
        raise ValueError("--keep-versions must be non-negative")

    owner = args.owner or (config.repository.owner if config.repository else None)
    repo = args.repo or (config.repository.name if config.repository else None)
    if not owner or not repo:
        raise ValueError("Missing --owner/--repo (or set GITHUB_REPOSITORY=owner/repo)")

    package_names = list(dict.fromkeys(name.strip() for name in args.packages))
    if not all(package_names):
        raise ValueError("Package names must not be blank")

    return [
        VersionLookup(
            owner=owner,
            repo=repo,
            package_name=name,
            num_versions=args.num_versions,
            keep_versions=args.keep_versions,
        )
        for name in package_names
    ]


def _render_text(reports: Mapping[str, SelectionReport]) -> str:
    # Several packages: prefix each line with its package name.
    prefixed = len(reports) > 1
    lines: list[str] = []
    for name, report in reports.items():
        prefix = f"{name} " if prefixed else ""
        lines.extend(f"{prefix}{version.id} {version.version}" for version in report.versions)
    return "\n".join(lines)


def _render_json(reports: Mapping[str, SelectionReport]) -> str:
    payload = [
        {
            "package": name,
            "versions": [
                {"id": version.id, "version": version.version} for version in report.versions
            ],
            "diagnostics": [diagnostic.message for diagnostic in report.diagnostics],
        }
        for name, report in reports.items()
    ]
    return json.dumps(payload, indent=2)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        config = get_github_config()
        lookups = _build_lookups(parsed_args, config)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        reports = select_deletable_versions(lookups, config=config)
    except Exception:
        log.exception("Fatal error while selecting versions")
        sys.exit(1)

    output = _render_json(reports) if parsed_args.format == "json" else _render_text(reports)
    if output:
        print(output)  # noqa: T201


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
