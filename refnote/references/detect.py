"""Guess a reference type from its URL."""

from __future__ import annotations

from urllib.parse import urlparse

# Host suffix -> type key; first match wins
HOST_TYPES: list[tuple[tuple[str, ...], str]] = [
    (("youtube.com", "youtu.be"), "video"),
    (("github.com", "gitlab.com", "bitbucket.org"), "repository"),
    (("udemy.com", "coursera.org", "edx.org", "skillshare.com"), "course"),
    (("books.google.com", "amazon.com", "goodreads.com"), "textbook"),
]


def detect_type(url: str | None) -> str | None:
    """Type key suggested by ``url``, or None when it is not a web URL."""
    value = (url or "").strip()
    if not value.lower().startswith(("http://", "https://")):
        return None

    host = (urlparse(value).hostname or "").lower()
    for suffixes, type_key in HOST_TYPES:
        for suffix in suffixes:
            if host == suffix or host.endswith("." + suffix):
                return type_key
    return "web-page"
