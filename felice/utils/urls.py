"""URL helpers tolerant of malformed links."""

from __future__ import annotations

from urllib.parse import urlsplit


def extract_hostname(link: str | None) -> str | None:
    """Return the lowercase hostname of an absolute URL, or None if it has none."""

    if not link or not isinstance(link, str):
        return None
    try:
        parts = urlsplit(link.strip())
        hostname = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not hostname:
        return None
    return hostname


__all__ = ["extract_hostname"]
