"""Structured logging helpers for page fetches."""

from __future__ import annotations

from typing import Any

from core.structured_logging import emit_json_event
from fetcher.graphql import PageResponse


def page_log_to_dict(page_number: int, after: str | None, response: PageResponse) -> dict[str, Any]:
    """Convert one page fetch into a JSON-safe dictionary."""
    page_info = response.page.page_info
    return {
        "page": page_number,
        "after": after,
        "records": len(response.page.nodes),
        "end_cursor": page_info.end_cursor,
        "has_next_page": page_info.has_next_page,
        "status_code": response.status_code,
        "latency_ms": response.latency_ms,
        "bytes_received": response.bytes_received,
    }


def emit_page_log(
    run_id: str | None,
    page_number: int,
    after: str | None,
    response: PageResponse,
) -> str:
    """Emit a `clubs_page_fetched` line and return it for testability."""
    return emit_json_event(
        "clubs_page_fetched",
        run_id=run_id,
        component="fetcher",
        **page_log_to_dict(page_number, after, response),
    )
