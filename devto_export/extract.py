"""Media reference discovery and local filename derivation."""

from __future__ import annotations

import posixpath
import re
from typing import Iterator, List
from urllib.parse import urlsplit

from .errors import UrlMalformedError
from .models import ArticleRecord

# Matches ![alt](url) and ![](url); group 1 is the URL.
IMAGE_PATTERN = re.compile(r"!\[[^\]]*\]\(([^)]+)\)")

SUPPORTED_SCHEMES = {"http", "https"}
IMAGE_FIELDS = ("cover_image", "social_image")


def iter_image_tokens(markdown: str) -> Iterator[re.Match[str]]:
    """Yield inline image matches in document order."""
    return IMAGE_PATTERN.finditer(markdown)


def extract_image_urls(article: ArticleRecord) -> List[str]:
    """Collect every image URL referenced by an article, duplicates included."""
    urls: List[str] = []
    for field_name in IMAGE_FIELDS:
        value = article.get(field_name)
        if isinstance(value, str) and value:
            urls.append(value)
    body = article.get("body_markdown")
    if isinstance(body, str) and body:
        urls.extend(match.group(1) for match in iter_image_tokens(body))
    return urls


def local_filename(url: str) -> str:
    """Return the final path segment of ``url`` to use as the on-disk name."""
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise UrlMalformedError(url, str(exc)) from exc
    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        raise UrlMalformedError(url, f"unsupported scheme '{parts.scheme}'")
    if not parts.netloc:
        raise UrlMalformedError(url, "missing host")
    filename = posixpath.basename(parts.path)
    if filename in ("", ".", ".."):
        raise UrlMalformedError(url, "no filename in path")
    return filename
