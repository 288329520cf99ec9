"""Minimal CLI entrypoint for club-collector."""

from __future__ import annotations

import argparse
import json
from importlib.resources.abc import Traversable
from typing import Any, Sequence
from uuid import uuid4

from pydantic import ValidationError

from core.config import ClubsApiConfig, FetchSettings
from core.models import FetchRun, RunStatus
from core.pipeline import ClubSyncPipeline
from core.structured_logging import emit_error_event, emit_json_event
from exporters import EXPORT_FORMATS, build_exporter
from exporters.base import CLUB_ROW_SCHEMA_FILE
from fetcher import ClubsGraphQLClient, PaginationDriver


COUNTRY_ADJECTIVES = {"CA": "Canadian"}
DEFAULT_OUTPUT_STEM = "clubs"


def _emit_cli_event(
    event_type: str,
    *,
    run_id: str,
    command: str,
    **payload: Any,
) -> str:
    """Emit one structured CLI event line with standard fields."""
    return emit_json_event(
        event_type=event_type,
        run_id=run_id,
        command=command,
        **payload,
    )


def _validate_schema_file(path: Traversable) -> None:
    """Validate that a JSON schema file is well-formed and has required top-level keys."""
    data = json.loads(path.read_text(encoding="utf-8"))
    required_keys = {"$schema", "type", "properties", "required"}
    missing = required_keys.difference(data)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ValueError(f"{path.name} missing required schema keys: {missing_str}")
    undeclared = set(data["required"]).difference(data["properties"])
    if undeclared:
        raise ValueError(f"{path.name} requires undeclared properties: {', '.join(sorted(undeclared))}")


def _markdown_title(country_code: str) -> str:
    """Heading used for markdown exports, e.g. "Canadian Code Clubs"."""
    adjective = COUNTRY_ADJECTIVES.get(country_code.upper())
    if adjective:
        return f"{adjective} Code Clubs"
    return f"Code Clubs ({country_code.upper()})"


def _settings_from_args(args: argparse.Namespace) -> FetchSettings:
    """Build per-run fetch settings from CLI flags."""
    try:
        return FetchSettings(
            endpoint=args.endpoint,
            country_code=args.country.upper(),
            verified=args.verified,
            page_size=args.page_size,
            max_pages=args.max_pages,
            page_delay_seconds=args.page_delay,
            timeout_seconds=args.timeout,
        )
    except ValidationError as exc:
        raise ValueError(f"Invalid fetch settings: {exc.errors()[0]['msg']}") from exc


def _cmd_validate_schemas(_: argparse.Namespace) -> int:
    """Validate schema files for basic structural correctness."""
    run_id = str(uuid4())
    row_schema = CLUB_ROW_SCHEMA_FILE
    if not row_schema.is_file():
        raise FileNotFoundError(f"Schema file not found: {row_schema}")
    _validate_schema_file(row_schema)
    _emit_cli_event(
        "cli_validate_schemas_completed",
        run_id=run_id,
        command="validate-schemas",
        schema_files=[str(row_schema)],
    )
    return 0


def _cmd_fetch(args: argparse.Namespace) -> int:
    """Fetch every page of clubs and write one export file."""
    run_id = args.run_id or str(uuid4())
    settings = _settings_from_args(args)

    driver = PaginationDriver(
        client=ClubsGraphQLClient(settings=settings),
        settings=settings,
        lenient_urls=not args.strict_urls,
    )
    exporter = build_exporter(args.format, title=_markdown_title(settings.country_code))
    output = args.output or f"{DEFAULT_OUTPUT_STEM}{exporter.suffix}"
    pipeline = ClubSyncPipeline(source=driver, exporter=exporter)

    run: FetchRun = pipeline.run(run_id=run_id, output_path=str(output))
    _emit_cli_event(
        "cli_fetch_completed",
        run_id=run.id,
        command="fetch",
        status=run.status.value,
        country_code=run.country_code,
        format=args.format,
        output=run.output_path,
        pages=run.pages_fetched,
        records=run.records_count,
        provinces=sorted({club.province or "Unknown" for club in run.clubs}),
        note=run.error_message,
    )
    return 0 if run.status == RunStatus.COMPLETED else 1


def build_parser() -> argparse.ArgumentParser:
    """Create argument parser for the club-collector CLI."""
    parser = argparse.ArgumentParser(
        prog="club-collector",
        description="Fetch club listings from the clubs GraphQL API and export them",
    )
    parser.add_argument("--version", action="version", version="club-collector 0.1.0")

    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser(
        "validate-schemas",
        help="Validate the export row JSON schema",
    )
    validate_parser.set_defaults(func=_cmd_validate_schemas)

    fetch_parser = subparsers.add_parser(
        "fetch",
        help="Fetch all club pages and write a CSV or markdown export",
    )
    fetch_parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="csv",
        help="Export format (default csv)",
    )
    fetch_parser.add_argument("--output", help="Output path (default clubs.csv or clubs.md)")
    fetch_parser.add_argument(
        "--country",
        default=ClubsApiConfig.COUNTRY_CODE,
        help="Two-letter country code filter",
    )
    verified_group = fetch_parser.add_mutually_exclusive_group()
    verified_group.add_argument(
        "--verified",
        dest="verified",
        action="store_true",
        help="Only verified clubs",
    )
    verified_group.add_argument(
        "--unverified",
        dest="verified",
        action="store_false",
        help="Filter with verified=false",
    )
    fetch_parser.set_defaults(verified=ClubsApiConfig.VERIFIED_ONLY)
    fetch_parser.add_argument("--page-size", type=int, default=ClubsApiConfig.PAGE_SIZE)
    fetch_parser.add_argument(
        "--timeout",
        type=float,
        default=ClubsApiConfig.REQUEST_TIMEOUT_SECONDS,
        help="Per-request timeout in seconds",
    )
    fetch_parser.add_argument(
        "--max-pages",
        type=int,
        default=ClubsApiConfig.MAX_PAGES,
        help="Abort if the API reports more pages than this",
    )
    fetch_parser.add_argument(
        "--page-delay",
        type=float,
        default=ClubsApiConfig.PAGE_DELAY_SECONDS,
        help="Seconds to wait between page requests",
    )
    fetch_parser.add_argument(
        "--strict-urls",
        action="store_true",
        help="Drop websites without an explicit scheme instead of assuming https",
    )
    fetch_parser.add_argument("--endpoint", default=ClubsApiConfig.ENDPOINT, help="GraphQL endpoint URL")
    fetch_parser.add_argument("--run-id", help="Optional explicit run ID")
    fetch_parser.set_defaults(func=_cmd_fetch)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Execute CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return int(args.func(args))
    except Exception as exc:
        emit_error_event(
            "cli_error",
            exc,
            run_id=getattr(args, "run_id", None) or str(uuid4()),
            command=str(getattr(args, "command", "unknown")),
        )
        return 1


def cli() -> None:
    """Console-script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
