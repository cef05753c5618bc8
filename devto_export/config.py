"""Configuration objects and constants for the exporter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_INPUT_NAME = "articles.json"
DEFAULT_CHUNK_SIZE = 64 * 1024
RECORD_FILENAME = "article.json"
DOCUMENT_FILENAME = "article.md"


@dataclass
class ExportConfig:
    """Top-level settings that control where exports are read and written."""

    input_path: Path
    output_root: Path
    timeout: float = 30.0
    chunk_size: int = DEFAULT_CHUNK_SIZE
    record_filename: str = RECORD_FILENAME
    document_filename: str = DOCUMENT_FILENAME
