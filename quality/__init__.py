"""Quality utilities: field normalization, province inference, URL validation."""

from quality.normalize import normalize_club, normalize_clubs
from quality.province import lookup_province, resolve_province
from quality.urlnorm import validate_url

__all__ = [
    "normalize_club",
    "normalize_clubs",
    "lookup_province",
    "resolve_province",
    "validate_url",
]
