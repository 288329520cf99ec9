"""Fetcher subsystem: GraphQL page client, pagination, and pacing."""

from fetcher.graphql import CLUBS_QUERY, ClubsGraphQLClient, PageResponse
from fetcher.logging import emit_page_log
from fetcher.pagination import PaginationDriver
from fetcher.politeness import PagePacer

__all__ = [
    "CLUBS_QUERY",
    "ClubsGraphQLClient",
    "PageResponse",
    "emit_page_log",
    "PaginationDriver",
    "PagePacer",
]
