"""High-level orchestration for exporting articles to local directories."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import requests

from .config import ExportConfig
from .errors import FetchError, FilesystemError, UrlMalformedError
from .extract import extract_image_urls, local_filename
from .images import fetch_asset
from .markdown import render_document, write_document
from .models import (
    ArticleOutcome,
    ArticleRecord,
    ArticleStatus,
    AssetOutcome,
    AssetStatus,
    RunSummary,
    UrlToLocalMap,
)
from .storage import ensure_article_dir, load_articles, resolve_article_dir, write_record

logger = logging.getLogger("devto_export")


def resolve_asset(
    session: requests.Session,
    url: str,
    directory: Path,
    config: ExportConfig,
    failed_urls: Dict[str, str],
) -> AssetOutcome:
    """Fetch one media reference, reporting failures instead of raising them."""
    start = time.perf_counter()
    if url in failed_urls:
        return AssetOutcome(
            url=url,
            filename=None,
            destination=None,
            status=AssetStatus.FAILED,
            error=failed_urls[url],
        )

    try:
        filename = local_filename(url)
    except UrlMalformedError as exc:
        logger.warning("Failed to download %s: %s", url, exc)
        failed_urls[url] = str(exc)
        return AssetOutcome(
            url=url,
            filename=None,
            destination=None,
            status=AssetStatus.FAILED,
            seconds=time.perf_counter() - start,
            error=str(exc),
        )

    destination = directory / filename
    try:
        status = fetch_asset(
            session,
            url,
            destination,
            timeout=config.timeout,
            chunk_size=config.chunk_size,
        )
    except FetchError as exc:
        logger.warning("Failed to download %s: %s", url, exc)
        failed_urls[url] = str(exc)
        return AssetOutcome(
            url=url,
            filename=filename,
            destination=destination,
            status=AssetStatus.FAILED,
            seconds=time.perf_counter() - start,
            error=str(exc),
        )
    except OSError as exc:
        raise FilesystemError(f"Cannot write {destination}: {exc}") from exc

    return AssetOutcome(
        url=url,
        filename=filename,
        destination=destination,
        status=status,
        seconds=time.perf_counter() - start,
    )


def export_article(
    index: int,
    article: ArticleRecord,
    config: ExportConfig,
    session: requests.Session,
) -> ArticleOutcome:
    """Materialize one article: record, media files and Markdown document."""
    path = article.get("path") if isinstance(article, dict) else None
    if not path:
        logger.debug("Skipping record %d without a path", index)
        return ArticleOutcome(index=index, path=None, status=ArticleStatus.SKIPPED)

    start = time.perf_counter()
    outcome = ArticleOutcome(index=index, path=str(path), status=ArticleStatus.EXPORTED)
    try:
        directory = ensure_article_dir(resolve_article_dir(config.output_root, str(path)))
        outcome.output_dir = directory
        outcome.record_path = write_record(directory, article, config.record_filename)

        url_map: UrlToLocalMap = {}
        failed_urls: Dict[str, str] = {}
        for url in extract_image_urls(article):
            asset = resolve_asset(session, url, directory, config, failed_urls)
            outcome.assets.append(asset)
            if asset.ok and asset.filename:
                url_map[url] = asset.filename
        outcome.url_map = url_map

        document = render_document(article, url_map)
        if document is not None:
            outcome.document_path = write_document(
                directory, document, config.document_filename
            )
    except FilesystemError as exc:
        logger.error("Failed to export article %s: %s", path, exc)
        outcome.status = ArticleStatus.FAILED
        outcome.error = str(exc)

    outcome.seconds = time.perf_counter() - start
    return outcome


def run_export(
    articles: Iterable[ArticleRecord],
    config: ExportConfig,
    session: Optional[requests.Session] = None,
) -> List[ArticleOutcome]:
    """Export each article sequentially, in input order."""
    owns_session = session is None
    if session is None:
        session = requests.Session()
    outcomes: List[ArticleOutcome] = []
    try:
        for index, article in enumerate(articles):
            outcomes.append(export_article(index, article, config, session))
    finally:
        if owns_session:
            session.close()
    return outcomes


def export_file(
    config: ExportConfig,
    session: Optional[requests.Session] = None,
) -> List[ArticleOutcome]:
    """Load the export named by ``config.input_path`` and process every article."""
    articles = load_articles(config.input_path)
    logger.info("Loaded %d article(s) from %s", len(articles), config.input_path)
    return run_export(articles, config, session)


def summarize(outcomes: Iterable[ArticleOutcome], seconds: float = 0.0) -> RunSummary:
    outcomes = list(outcomes)
    assets = [asset for outcome in outcomes for asset in outcome.assets]
    return RunSummary(
        total=len(outcomes),
        exported=sum(1 for o in outcomes if o.status is ArticleStatus.EXPORTED),
        skipped=sum(1 for o in outcomes if o.status is ArticleStatus.SKIPPED),
        failed=sum(1 for o in outcomes if o.status is ArticleStatus.FAILED),
        downloaded=sum(1 for a in assets if a.status is AssetStatus.DOWNLOADED),
        already_present=sum(1 for a in assets if a.status is AssetStatus.ALREADY_PRESENT),
        assets_failed=sum(1 for a in assets if a.status is AssetStatus.FAILED),
        seconds=seconds,
    )
