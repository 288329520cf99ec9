"""
Core Pydantic models for club-collector.

Design principles:
- Wire models (RawClub, PageInfo, ClubPage) mirror the GraphQL payload and
  coerce optional fields leniently instead of rejecting records
- NormalizedClub keeps "no data" as None; sentinel strings only appear at the
  serialization boundary (`to_row`)
- FetchRun is the explicit state of one fetch-and-export run
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ============================================================================
# Enums / constants
# ============================================================================

class RunStatus(str, Enum):
    """Status of a fetch run."""
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


NOT_AVAILABLE = "N/A"
NOT_SPECIFIED = "Not specified"
UNKNOWN = "Unknown"
UNNAMED_CLUB = "Unnamed Club"

# Export column order (CSV header).
CSV_COLUMNS: tuple[str, ...] = (
    "name",
    "postalCode",
    "address",
    "municipality",
    "province",
    "venue",
    "coordinates",
    "website",
    "websiteHost",
    "publicAccess",
    "volunteersNeeded",
    "meetingFrequency",
    "email",
    "startTime",
    "endTime",
    "day",
    "frequencyNote",
    "attendanceType",
    "brand",
    "stage",
)


def _yes_no(value: Optional[bool]) -> str:
    return "Yes" if value else "No"


_SIX_PLACES = Decimal("0.000001")


def _fixed6(value: float) -> str:
    """Six decimal places from the exact binary value, halves away from zero."""
    if not math.isfinite(value):
        return f"{value:.6f}"
    return f"{Decimal(value).quantize(_SIX_PLACES, rounding=ROUND_HALF_UP):f}"


# ============================================================================
# Wire models (remote payload)
# ============================================================================

class WireModel(BaseModel):
    """Base for models parsed from the camelCase GraphQL payload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class RawClub(WireModel):
    """
    One club node as returned by the API. Every field is optional.

    Two address layouts exist in the wild: a split `address1`/`address2`
    pair, and a single free-text `address` ("Ottawa, ON K1A 0B1").
    """
    name: Optional[str] = None
    postal_code: Optional[str] = None
    address: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    website: Optional[str] = None
    municipality: Optional[str] = None
    administrative_area: Optional[str] = None
    venue_name: Optional[str] = None
    venue_type: Optional[str] = None
    open_to_public: Optional[bool] = None
    looking_for_volunteers: Optional[bool] = None
    frequency: Optional[str] = None
    frequency_note: Optional[str] = None
    attendance_type: Optional[str] = None
    brand: Optional[str] = None
    stage: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    day: Optional[str] = None
    email: Optional[str] = None

    @field_validator(
        "name", "postal_code", "address", "address1", "address2", "website",
        "municipality", "administrative_area", "venue_name", "venue_type",
        "frequency", "frequency_note", "attendance_type", "brand", "stage",
        "start_time", "end_time", "day", "email",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        """Strip strings; blank strings and non-scalars become None."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(v)
        if not isinstance(v, str):
            return None
        v = v.strip()
        return v or None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coerce_coordinate(cls, v: Any) -> Optional[float]:
        """Accept numbers or numeric strings; anything else is absent."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, str) and not v.strip():
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(value) else None

    @field_validator("open_to_public", "looking_for_volunteers", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> Optional[bool]:
        """Accept booleans and common truthy/falsy spellings."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in {"true", "yes", "1"}:
                return True
            if lowered in {"false", "no", "0"}:
                return False
        if isinstance(v, (int, float)):
            return bool(v)
        return None


class PageInfo(WireModel):
    """Cursor state for one page."""
    end_cursor: Optional[str] = None
    has_next_page: bool

    @field_validator("end_cursor", mode="before")
    @classmethod
    def stringify_cursor(cls, v: Any) -> Any:
        """Opaque cursors may arrive as numbers; they are echoed back as strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ClubPage(WireModel):
    """One page of clubs (`data.clubs`)."""
    nodes: List[RawClub] = Field(default_factory=list)
    page_info: PageInfo


# ============================================================================
# Normalized output
# ============================================================================

class ValidatedUrl(BaseModel):
    """A parsed website with browser-style normalized href."""

    model_config = ConfigDict(frozen=True)

    href: str
    hostname: str


class NormalizedClub(BaseModel):
    """
    Display-ready club record.

    None means the source had no value. `to_row()` applies the sentinels
    ("N/A", "Not specified", "Unknown", ...) so every exported column has a
    concrete value.
    """
    name: Optional[str] = None
    postal_code: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    municipality: Optional[str] = None
    province: Optional[str] = None
    venue: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    website: Optional[ValidatedUrl] = None
    public_access: Optional[bool] = None
    volunteers_needed: Optional[bool] = None
    meeting_frequency: Optional[str] = None
    email: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    day: Optional[str] = None
    frequency_note: Optional[str] = None
    attendance_type: Optional[str] = None
    brand: Optional[str] = None
    stage: Optional[str] = None

    @property
    def coordinates(self) -> Optional[str]:
        """`"lat, lon"` to 6 decimals; None unless both are present."""
        if self.latitude is None or self.longitude is None:
            return None
        return f"{_fixed6(self.latitude)}, {_fixed6(self.longitude)}"

    @property
    def website_href(self) -> Optional[str]:
        return self.website.href if self.website else None

    @property
    def website_host(self) -> Optional[str]:
        return self.website.hostname if self.website else None

    def to_row(self) -> Dict[str, Optional[str]]:
        """Flatten to export columns with sentinels applied."""
        return {
            "name": self.name or UNNAMED_CLUB,
            "postalCode": self.postal_code or NOT_AVAILABLE,
            "address": self.address or NOT_SPECIFIED,
            "municipality": self.municipality or NOT_AVAILABLE,
            "province": self.province or UNKNOWN,
            "venue": self.venue or NOT_SPECIFIED,
            "coordinates": self.coordinates or NOT_AVAILABLE,
            "website": self.website_href,
            "websiteHost": self.website_host or NOT_AVAILABLE,
            "publicAccess": _yes_no(self.public_access),
            "volunteersNeeded": _yes_no(self.volunteers_needed),
            "meetingFrequency": self.meeting_frequency or NOT_SPECIFIED,
            "email": self.email or NOT_AVAILABLE,
            "startTime": self.start_time or NOT_AVAILABLE,
            "endTime": self.end_time or NOT_AVAILABLE,
            "day": self.day or NOT_AVAILABLE,
            "frequencyNote": self.frequency_note or NOT_AVAILABLE,
            "attendanceType": self.attendance_type or NOT_AVAILABLE,
            "brand": self.brand or NOT_AVAILABLE,
            "stage": self.stage or NOT_AVAILABLE,
        }


# ============================================================================
# Run state
# ============================================================================

class FetchRun(BaseModel):
    """
    State of one fetch-and-export run, returned to the caller.

    On failure `clubs` stays empty and `error_message` holds the text meant
    for the user.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    country_code: str

    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    ended_at: Optional[datetime] = None

    status: RunStatus = RunStatus.RUNNING
    error_message: Optional[str] = None

    pages_fetched: int = 0
    records_count: int = 0
    output_path: Optional[str] = None

    clubs: List[NormalizedClub] = Field(default_factory=list)
