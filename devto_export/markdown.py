"""Markdown document rendering with YAML front matter."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from .config import DOCUMENT_FILENAME
from .errors import FilesystemError
from .extract import IMAGE_PATTERN
from .models import ArticleRecord, UrlToLocalMap

logger = logging.getLogger("devto_export")

FRONT_MATTER_MARKER = "---"


def encode_scalar(value: Any) -> str:
    """Encode a value as a quoted JSON literal, which YAML also accepts."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _resolve(value: Any, url_map: UrlToLocalMap) -> Any:
    if isinstance(value, str):
        return url_map.get(value, value)
    return value


def compose_front_matter(article: ArticleRecord, url_map: UrlToLocalMap) -> str:
    """Build the delimited metadata block placed above the article body."""
    lines: List[str] = [FRONT_MATTER_MARKER]
    lines.append(f"title: {encode_scalar(article.get('title') or '')}")
    if article.get("published_at"):
        lines.append(f"date: {encode_scalar(article['published_at'])}")
    if article.get("tags"):
        lines.append(f"tags: {encode_scalar(article['tags'])}")
    for key in ("cover_image", "social_image"):
        if article.get(key):
            lines.append(f"{key}: {encode_scalar(_resolve(article[key], url_map))}")
    for key in ("canonical_url", "path"):
        if article.get(key):
            lines.append(f"{key}: {encode_scalar(article[key])}")
    lines.append(FRONT_MATTER_MARKER)
    return "\n".join(lines) + "\n"


def replace_image_links(markdown: str, url_map: UrlToLocalMap) -> str:
    """Point inline image tokens at local files, touching only the URL part."""
    if not url_map:
        return markdown

    def _swap(match) -> str:
        local = url_map.get(match.group(1))
        if local is None:
            return match.group(0)
        token = match.group(0)
        url_start = match.start(1) - match.start(0)
        url_end = match.end(1) - match.start(0)
        return token[:url_start] + local + token[url_end:]

    return IMAGE_PATTERN.sub(_swap, markdown)


def render_document(article: ArticleRecord, url_map: UrlToLocalMap) -> Optional[str]:
    """Return the full Markdown document, or None when the article has no body."""
    body = article.get("body_markdown")
    if not body:
        return None
    return compose_front_matter(article, url_map) + replace_image_links(str(body), url_map)


def write_document(
    directory: Path,
    document: str,
    filename: str = DOCUMENT_FILENAME,
) -> Path:
    destination = directory / filename
    try:
        destination.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Cannot write {destination}: {exc}") from exc
    logger.info("Saved Markdown to %s", destination)
    return destination
