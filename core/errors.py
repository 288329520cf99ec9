"""Error kinds raised while fetching club pages."""

from __future__ import annotations

import json
from typing import Any


class ClubFetchError(Exception):
    """Base class for any failure that aborts a fetch run."""


class TransportError(ClubFetchError):
    """Raised on a non-2xx response or a connection that never got one."""

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        self.status_code = status_code
        if message is None:
            message = f"HTTP error: {status_code}" if status_code is not None else "HTTP error"
        super().__init__(message)


class FetchTimeoutError(ClubFetchError, TimeoutError):
    """Raised when one page request exceeds its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"request timed out after {timeout_seconds:g}s")


class RemoteQueryError(ClubFetchError):
    """Raised when the API answers with a populated `errors` array."""

    def __init__(self, payload: Any) -> None:
        self.payload = payload
        super().__init__(json.dumps(payload, ensure_ascii=False, default=str))


class MalformedResponseError(ClubFetchError):
    """Raised when the response body does not have the expected shape."""


class PaginationLimitExceeded(ClubFetchError):
    """Raised when the API keeps reporting more pages past the safety cap."""

    def __init__(self, max_pages: int) -> None:
        self.max_pages = max_pages
        super().__init__(f"pagination exceeded {max_pages} pages")


class FetchCancelled(ClubFetchError):
    """Raised at a page boundary when the caller asked to stop."""

    def __init__(self, pages_fetched: int) -> None:
        self.pages_fetched = pages_fetched
        super().__init__(f"fetch cancelled after {pages_fetched} pages")
