"""GraphQL page client for the clubs API."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import requests
from pydantic import ValidationError

from core.config import FetchSettings
from core.errors import FetchTimeoutError, MalformedResponseError, RemoteQueryError, TransportError
from core.models import ClubPage


CLUBS_QUERY = """
query ($countryCode: String!, $verified: Boolean, $after: String, $first: Int!) {
    clubs(
        after: $after,
        first: $first,
        filterBy: { countryCode: $countryCode, verified: $verified }
    ) {
        nodes {
            name
            postalCode
            address1
            address2
            email
            startTime
            endTime
            day
            frequency
            frequencyNote
            attendanceType
            brand
            stage
            latitude
            longitude
            website
            municipality
            administrativeArea
            venueName
            venueType
            openToPublic
            lookingForVolunteers
        }
        pageInfo {
            endCursor
            hasNextPage
        }
    }
}
"""


@dataclass(frozen=True)
class PageResponse:
    """One successfully parsed page plus transport metadata."""

    page: ClubPage
    status_code: int
    latency_ms: int
    bytes_received: int


def build_variables(settings: FetchSettings, after: str | None) -> dict[str, Any]:
    """Build GraphQL variables for one page request."""
    return {
        "countryCode": settings.country_code,
        "verified": settings.verified,
        "after": after,
        "first": settings.page_size,
    }


def _parse_page(body: Any) -> ClubPage:
    """Extract `data.clubs` from a decoded response body."""
    if not isinstance(body, dict):
        raise MalformedResponseError(f"expected a JSON object, got {type(body).__name__}")

    errors = body.get("errors")
    if errors:
        raise RemoteQueryError(errors)

    data = body.get("data")
    clubs = data.get("clubs") if isinstance(data, dict) else None
    if not isinstance(clubs, dict):
        raise MalformedResponseError("response is missing data.clubs")

    try:
        return ClubPage.model_validate(clubs)
    except ValidationError as exc:
        raise MalformedResponseError(f"unexpected data.clubs shape: {exc}") from exc


class ClubsGraphQLClient:
    """POST the clubs query for one page at a time."""

    def __init__(
        self,
        settings: FetchSettings | None = None,
        session: requests.Session | None = None,
        query: str = CLUBS_QUERY,
    ) -> None:
        """Initialize HTTP settings and the shared session."""
        self.settings = settings or FetchSettings()
        self.session = session or requests.Session()
        self.query = query

    def fetch_page(self, after: str | None) -> PageResponse:
        """
        Fetch one page starting after `after`.

        Raises:
            FetchTimeoutError: The request exceeded the configured deadline.
            TransportError: Non-2xx status, or no response at all.
            RemoteQueryError: The API returned a populated `errors` array.
            MalformedResponseError: The body is not the expected JSON shape.
        """
        start = time.monotonic()
        payload = {"query": self.query, "variables": build_variables(self.settings, after)}

        try:
            response = self.session.post(
                self.settings.endpoint,
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": self.settings.user_agent,
                },
                timeout=self.settings.timeout_seconds,
            )
        except requests.Timeout as exc:
            raise FetchTimeoutError(self.settings.timeout_seconds) from exc
        except requests.RequestException as exc:
            raise TransportError(None, f"HTTP error: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise TransportError(response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponseError("response body is not valid JSON") from exc

        page = _parse_page(body)
        return PageResponse(
            page=page,
            status_code=response.status_code,
            latency_ms=int((time.monotonic() - start) * 1000),
            bytes_received=len(response.content or b""),
        )
