"""Data models used throughout the export pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

ArticleRecord = Dict[str, Any]
UrlToLocalMap = Dict[str, str]


class AssetStatus(str, Enum):
    DOWNLOADED = "downloaded"
    ALREADY_PRESENT = "already_present"
    FAILED = "failed"


class ArticleStatus(str, Enum):
    EXPORTED = "exported"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class AssetOutcome:
    """Result of resolving one media reference to a local file."""

    url: str
    filename: Optional[str]
    destination: Optional[Path]
    status: AssetStatus
    seconds: float = 0.0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is not AssetStatus.FAILED


@dataclass
class ArticleOutcome:
    """Result and timing details for one input record."""

    index: int
    path: Optional[str]
    status: ArticleStatus
    output_dir: Optional[Path] = None
    record_path: Optional[Path] = None
    document_path: Optional[Path] = None
    assets: List[AssetOutcome] = field(default_factory=list)
    url_map: UrlToLocalMap = field(default_factory=dict)
    seconds: float = 0.0
    error: Optional[str] = None

    @property
    def failed_assets(self) -> List[AssetOutcome]:
        return [asset for asset in self.assets if not asset.ok]

    @property
    def complete(self) -> bool:
        """True when the article was exported and every asset resolved."""
        return self.status is ArticleStatus.EXPORTED and not self.failed_assets


@dataclass
class RunSummary:
    """Aggregated counts for a whole export run."""

    total: int
    exported: int
    skipped: int
    failed: int
    downloaded: int
    already_present: int
    assets_failed: int
    seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.failed == 0
