"""Cursor pagination driver over the clubs GraphQL API."""

from __future__ import annotations

from typing import Iterator, Optional

from core.config import FetchSettings
from core.errors import FetchCancelled, MalformedResponseError, PaginationLimitExceeded
from core.models import NormalizedClub
from core.pipeline import CancelCheck, ClubSource
from core.structured_logging import emit_json_event
from fetcher.graphql import ClubsGraphQLClient, PageResponse
from fetcher.logging import emit_page_log
from fetcher.politeness import PagePacer
from quality.normalize import normalize_clubs


class PaginationDriver(ClubSource):
    """
    Request pages until `hasNextPage` is false, normalizing each page.

    Loop state (`cursor`, `has_next_page`) lives only inside one call to
    `iter_pages`. A failure on any page propagates and ends the iteration.
    """

    def __init__(
        self,
        client: ClubsGraphQLClient | None = None,
        settings: FetchSettings | None = None,
        pacer: PagePacer | None = None,
        lenient_urls: bool = True,
        log_pages: bool = True,
    ) -> None:
        """Initialize page client, pacing policy, and normalization mode."""
        self.settings = settings or (client.settings if client else FetchSettings())
        self.client = client or ClubsGraphQLClient(settings=self.settings)
        self.pacer = pacer or PagePacer(delay_seconds=self.settings.page_delay_seconds)
        self.lenient_urls = lenient_urls
        self.log_pages = log_pages
        self.pages_fetched = 0

    @property
    def country_code(self) -> str:
        return self.settings.country_code

    def iter_pages(
        self,
        run_id: str | None = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> Iterator[list[NormalizedClub]]:
        """Yield normalized clubs one page at a time, in API order."""
        cursor: str | None = None
        has_next_page = True
        self.pages_fetched = 0
        self.pacer.reset()

        while has_next_page:
            if self.pages_fetched >= self.settings.max_pages:
                raise PaginationLimitExceeded(self.settings.max_pages)
            if should_cancel is not None and self.pages_fetched and should_cancel():
                raise FetchCancelled(self.pages_fetched)

            with self.pacer.request_slot():
                response: PageResponse = self.client.fetch_page(cursor)
            self.pages_fetched += 1

            if self.log_pages:
                emit_page_log(run_id, self.pages_fetched, cursor, response)

            page_info = response.page.page_info
            if page_info.has_next_page and page_info.end_cursor is None:
                raise MalformedResponseError(
                    f"page {self.pages_fetched} reports more pages but no endCursor"
                )

            yield normalize_clubs(response.page.nodes, lenient_urls=self.lenient_urls)

            cursor = page_info.end_cursor
            has_next_page = page_info.has_next_page

    def fetch_all(
        self,
        run_id: str,
        should_cancel: Optional[CancelCheck] = None,
    ) -> list[NormalizedClub]:
        """Accumulate every page into one list."""
        clubs: list[NormalizedClub] = []
        for page in self.iter_pages(run_id, should_cancel=should_cancel):
            clubs.extend(page)

        emit_json_event(
            "clubs_fetch_completed",
            run_id=run_id,
            component="fetcher",
            country_code=self.settings.country_code,
            pages=self.pages_fetched,
            records=len(clubs),
        )
        return clubs
