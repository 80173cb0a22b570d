"""URL, header and date helpers shared by the queue clients."""

from __future__ import annotations

import datetime as _dt
from email.utils import parsedate_to_datetime
from typing import Mapping
from urllib.parse import urlparse


# Storage credentials travel in these headers; their values never reach a log line.
CREDENTIAL_HEADERS = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "x-ms-copy-source-authorization",
        "x-ms-encryption-key",
    }
)
REDACTED = "[REDACTED]"

LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` safe to log: credential values are masked."""
    return {name: REDACTED if name.lower() in CREDENTIAL_HEADERS else value for name, value in headers.items()}


def validate_base_url(url: str, *, allow_http: bool = False) -> None:
    """Validate a storage account or queue URL before any path is derived from it."""
    if "\x00" in url:
        raise ValueError("Invalid base URL")
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("base URL must include scheme and host")
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"Unsupported base URL scheme: {parsed.scheme}")
    if parsed.scheme == "http" and not allow_http:
        host = (parsed.hostname or "").lower()
        if host not in LOCAL_HOSTS:
            raise ValueError("Non-HTTPS base URL is not allowed without allow_http=True")
    if parsed.query or parsed.fragment:
        raise ValueError("base URL must not carry a query string or fragment")


def validate_url_component(name: str, value: str) -> None:
    """Reject values that cannot be placed into a request URL."""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {type(value).__name__}")
    if not value:
        raise ValueError(f"{name} must not be empty")
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in value):
        raise ValueError(f"{name} contains control characters")


def parse_http_date(raw: str | None) -> _dt.datetime | None:
    """Parse an RFC 1123 header date into an aware UTC datetime."""
    if raw is None:
        return None

    raw = raw.strip()
    if not raw:
        return None

    try:
        parsed = parsedate_to_datetime(raw)
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed is None:
        return None

    if parsed.utcoffset() is None:
        return parsed.replace(tzinfo=_dt.timezone.utc)
    return parsed.astimezone(_dt.timezone.utc)


def validate_header_value(name: str, value: str) -> None:
    """Header values go on the wire as ASCII; reject anything httpx cannot encode."""
    try:
        value.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{name} header must be ASCII, got {value!r}") from exc
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in value):
        raise ValueError(f"{name} header contains control characters")
