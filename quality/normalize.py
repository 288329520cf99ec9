"""Field normalization: RawClub → NormalizedClub."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from core.models import UNKNOWN, NormalizedClub, RawClub
from quality.province import lookup_province
from quality.urlnorm import validate_url


def _join_address(raw: RawClub) -> str | None:
    """Join address1/address2, falling back to the single-string form."""
    parts = [part for part in (raw.address1, raw.address2) if part]
    if parts:
        return ", ".join(parts)
    return raw.address


def _city(raw: RawClub) -> str | None:
    """City is the text before the first comma of a free-text address."""
    if raw.address:
        head = raw.address.split(",", 1)[0].strip()
        if head:
            return head
    return raw.municipality


def _venue(raw: RawClub) -> str | None:
    if not raw.venue_name:
        return None
    return f"{raw.venue_name} ({raw.venue_type or UNKNOWN})"


def normalize_club(raw: RawClub | Mapping[str, Any], lenient_urls: bool = True) -> NormalizedClub:
    """
    Normalize one club node.

    Every field is derived independently. Coordinates use explicit presence
    checks, so a latitude or longitude of 0 is kept.
    """
    if not isinstance(raw, RawClub):
        raw = RawClub.model_validate(raw)

    address_text = raw.address or _join_address(raw)
    province = raw.administrative_area or lookup_province(raw.postal_code, address_text)

    return NormalizedClub(
        name=raw.name,
        postal_code=raw.postal_code.upper() if raw.postal_code else None,
        address=_join_address(raw),
        city=_city(raw),
        municipality=raw.municipality,
        province=province,
        venue=_venue(raw),
        latitude=raw.latitude,
        longitude=raw.longitude,
        website=validate_url(raw.website, lenient=lenient_urls),
        public_access=raw.open_to_public,
        volunteers_needed=raw.looking_for_volunteers,
        meeting_frequency=raw.frequency,
        email=raw.email,
        start_time=raw.start_time,
        end_time=raw.end_time,
        day=raw.day,
        frequency_note=raw.frequency_note,
        attendance_type=raw.attendance_type,
        brand=raw.brand,
        stage=raw.stage,
    )


def normalize_clubs(
    raws: Iterable[RawClub | Mapping[str, Any]],
    lenient_urls: bool = True,
) -> list[NormalizedClub]:
    """Normalize a sequence of nodes, preserving order."""
    return [normalize_club(raw, lenient_urls=lenient_urls) for raw in raws]
