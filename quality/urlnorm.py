"""Website URL validation and href normalization."""

from __future__ import annotations

import re
from urllib.parse import quote, urlsplit, urlunsplit

from core.models import ValidatedUrl


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
_HOSTNAME_RE = re.compile(r"^[a-z0-9_](?:[a-z0-9_-]*[a-z0-9_])?(?:\.[a-z0-9_](?:[a-z0-9_-]*[a-z0-9_])?)*\.?$")
_SPECIAL_SCHEMES = {"http", "https", "ftp", "ws", "wss"}
_DEFAULT_PORTS = {"http": 80, "https": 443, "ftp": 21, "ws": 80, "wss": 443}
_PATH_SAFE = "/%:@!$&'()*+,;=~"
_QUERY_SAFE = _PATH_SAFE + "?"


def _is_valid_host(hostname: str) -> bool:
    """Accept DNS-style names, IPv4 literals, and bracketed IPv6 literals."""
    if hostname.startswith("[") or ":" in hostname:
        return all(ch in "0123456789abcdef:." for ch in hostname.strip("[]"))
    return bool(_HOSTNAME_RE.match(hostname))


def _ascii_host(hostname: str) -> str | None:
    """Punycode an internationalized hostname; None if it cannot be encoded."""
    if hostname.isascii():
        return hostname
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return None


def validate_url(value: str | None, lenient: bool = False) -> ValidatedUrl | None:
    """
    Parse a candidate website into a ValidatedUrl, or None.

    Rules:
    - A scheme (`scheme://`) and a host are required
    - In lenient mode a bare host ("example.com/club") gets `https://` first
    - Scheme and host are lowercased; an empty http(s) path becomes "/"
    - Internationalized hosts are punycoded ("xn--...")
    - Whitespace is invalid in the scheme and host; in path, query, and
      fragment it is percent-encoded along with non-ASCII characters
    - Default ports are dropped; userinfo, query, and fragment are kept

    Never raises.
    """
    if not value:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    if lenient and not _SCHEME_RE.match(candidate):
        candidate = f"https://{candidate}"
    if not _SCHEME_RE.match(candidate):
        return None

    try:
        parsed = urlsplit(candidate)
        port = parsed.port
    except ValueError:
        return None
    if any(ch.isspace() for ch in parsed.scheme + parsed.netloc):
        return None

    scheme = parsed.scheme.lower()
    hostname = _ascii_host((parsed.hostname or "").lower())
    if not hostname or not _is_valid_host(hostname):
        return None

    host = f"[{hostname}]" if ":" in hostname else hostname
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    if parsed.username is not None:
        userinfo = parsed.username
        if parsed.password is not None:
            userinfo = f"{userinfo}:{parsed.password}"
        host = f"{userinfo}@{host}"

    path = quote(parsed.path, safe=_PATH_SAFE)
    if not path and scheme in _SPECIAL_SCHEMES:
        path = "/"
    query = quote(parsed.query, safe=_QUERY_SAFE)
    fragment = quote(parsed.fragment, safe=_QUERY_SAFE)

    href = urlunsplit((scheme, host, path, query, fragment))
    return ValidatedUrl(href=href, hostname=hostname.strip("[]"))
