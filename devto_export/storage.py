"""Reading the export file and materializing per-article directories."""

from __future__ import annotations

import json
import posixpath
from pathlib import Path
from typing import List

from .config import RECORD_FILENAME
from .errors import FilesystemError, InputParseError
from .models import ArticleRecord


def load_articles(path: Path) -> List[ArticleRecord]:
    """Load the article collection from a JSON export file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputParseError(f"Cannot read {path}: {exc}") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputParseError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise InputParseError(
            f"Expected a list of articles in {path}, got {type(payload).__name__}"
        )
    return payload


def resolve_article_dir(output_root: Path, article_path: str) -> Path:
    """Map an article ``path`` such as ``/user/slug`` onto the output root."""
    normalized = posixpath.normpath(article_path.lstrip("/"))
    if normalized in ("", ".") or normalized == ".." or normalized.startswith("../"):
        raise FilesystemError(
            f"Article path {article_path!r} does not name a directory under {output_root}"
        )
    return output_root.joinpath(*normalized.split("/"))


def ensure_article_dir(directory: Path) -> Path:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Cannot create directory {directory}: {exc}") from exc
    return directory


def write_record(
    directory: Path,
    article: ArticleRecord,
    filename: str = RECORD_FILENAME,
) -> Path:
    """Write the untouched article record as pretty-printed JSON."""
    destination = directory / filename
    try:
        destination.write_text(
            json.dumps(article, indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as exc:
        raise FilesystemError(f"Cannot write {destination}: {exc}") from exc
    return destination
