"""
Default fetch configuration for club-collector.

The class constants below are the baseline values for talking to the clubs
GraphQL API. They are validated at import time. Per-run overrides go through
the `FetchSettings` model, which is seeded from these defaults.

Design: one request at a time, a short pause between pages, and a hard page
ceiling so a misbehaving API cannot keep the loop alive forever.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ClubsApiConfig:
    """
    Immutable defaults for the clubs API.
    """

    # ========================================================================
    # Remote API
    # ========================================================================

    ENDPOINT: str = "https://clubs-api.raspberrypi.org/graphql"
    """GraphQL endpoint (POST only)."""

    COUNTRY_CODE: str = "CA"
    """ISO country code passed to filterBy.countryCode."""

    VERIFIED_ONLY: bool = False
    """Value passed to filterBy.verified."""

    # ========================================================================
    # Pagination
    # ========================================================================

    PAGE_SIZE: int = 100
    """Records requested per page (`first`)."""

    MAX_PAGES: int = 500
    """Safety cap on pages per run."""

    PAGE_DELAY_SECONDS: float = 0.3
    """Pause between consecutive page requests."""

    # ========================================================================
    # Transport
    # ========================================================================

    REQUEST_TIMEOUT_SECONDS: float = 10.0
    """Deadline for one page request (seconds)."""

    USER_AGENT: str = "club-collector/0.1"
    """User-Agent header."""

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration at startup.

        Raises:
            AssertionError: If any constraint is violated.
        """
        assert cls.ENDPOINT.startswith(("http://", "https://")), "ENDPOINT must be http(s)"
        assert len(cls.COUNTRY_CODE) == 2, "COUNTRY_CODE must be a 2-letter code"
        assert cls.PAGE_SIZE >= 1, "PAGE_SIZE must be ≥1"
        assert cls.MAX_PAGES >= 1, "MAX_PAGES must be ≥1"
        assert cls.PAGE_DELAY_SECONDS >= 0, "PAGE_DELAY_SECONDS must be ≥0"
        assert cls.REQUEST_TIMEOUT_SECONDS > 0, "REQUEST_TIMEOUT_SECONDS must be > 0"


# Validate at module import time
ClubsApiConfig.validate()


class FetchSettings(BaseModel):
    """Per-run fetch settings, defaulting to ClubsApiConfig."""

    endpoint: str = ClubsApiConfig.ENDPOINT
    country_code: str = Field(default=ClubsApiConfig.COUNTRY_CODE, min_length=2, max_length=2)
    verified: bool = ClubsApiConfig.VERIFIED_ONLY
    page_size: int = Field(default=ClubsApiConfig.PAGE_SIZE, ge=1)
    max_pages: int = Field(default=ClubsApiConfig.MAX_PAGES, ge=1)
    page_delay_seconds: float = Field(default=ClubsApiConfig.PAGE_DELAY_SECONDS, ge=0)
    timeout_seconds: float = Field(default=ClubsApiConfig.REQUEST_TIMEOUT_SECONDS, gt=0)
    user_agent: str = ClubsApiConfig.USER_AGENT
