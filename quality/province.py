"""Province/territory inference from Canadian postal codes or address text."""

from __future__ import annotations

import re

from core.models import UNKNOWN


# Province → first letters of its postal codes. Order matters: "X" is shared
# by NT and NU and resolves to whichever is listed first (NT). The postal
# prefix alone cannot tell them apart.
PROVINCE_PREFIXES: dict[str, tuple[str, ...]] = {
    "NL": ("A",),
    "NS": ("B",),
    "PE": ("C",),
    "NB": ("E",),
    "QC": ("G", "H", "J"),
    "ON": ("K", "L", "M", "N", "P"),
    "MB": ("R",),
    "SK": ("S",),
    "AB": ("T",),
    "BC": ("V",),
    "NT": ("X",),
    "YT": ("Y",),
    "NU": ("X",),
}

PROVINCE_CODES: tuple[str, ...] = tuple(sorted(PROVINCE_PREFIXES))

_PROVINCE_TOKEN_RE = re.compile(
    r"(?<![A-Za-z])(" + "|".join(PROVINCE_CODES) + r")(?![A-Za-z])",
    re.IGNORECASE,
)


def province_for_prefix(prefix: str) -> str | None:
    """Map one postal prefix letter to a province code."""
    letter = prefix[:1].upper()
    if not letter:
        return None
    for province, letters in PROVINCE_PREFIXES.items():
        if letter in letters:
            return province
    return None


def province_from_address(address: str) -> str | None:
    """Find the first standalone province abbreviation in free text."""
    match = _PROVINCE_TOKEN_RE.search(address)
    if match is None:
        return None
    return match.group(1).upper()


def lookup_province(postal_code: str | None = None, address: str | None = None) -> str | None:
    """
    Infer a province code, trying the postal code before the address.

    Returns None when neither source yields a match.
    """
    if postal_code:
        province = province_for_prefix(postal_code.strip())
        if province:
            return province
    if address:
        return province_from_address(address)
    return None


def resolve_province(postal_code: str | None = None, address: str | None = None) -> str:
    """Same as `lookup_province` but returns "Unknown" instead of None."""
    return lookup_province(postal_code, address) or UNKNOWN
