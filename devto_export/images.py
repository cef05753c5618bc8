"""Image downloading utilities."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from .config import DEFAULT_CHUNK_SIZE
from .errors import FetchHttpError, FetchTransportError
from .models import AssetStatus

logger = logging.getLogger("devto_export")


def _discard_partial(destination: Path) -> None:
    try:
        destination.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove partial file %s: %s", destination, exc)


def fetch_asset(
    session: requests.Session,
    url: str,
    destination: Path,
    timeout: float = 30.0,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AssetStatus:
    """Download ``url`` into ``destination`` unless the file already exists.

    Raises FetchHttpError for a non-200 response and FetchTransportError for
    network failures; in both cases no partial file is left behind.
    """
    if destination.exists():
        logger.info("Already downloaded: %s", destination)
        return AssetStatus.ALREADY_PRESENT

    logger.info("Downloading %s -> %s", url, destination)
    try:
        with session.get(url, stream=True, timeout=timeout) as resp:
            if resp.status_code != 200:
                raise FetchHttpError(url, resp.status_code)
            with destination.open("wb") as handle:
                for chunk in resp.iter_content(chunk_size=chunk_size):
                    if chunk:
                        handle.write(chunk)
    except FetchHttpError:
        _discard_partial(destination)
        raise
    except (requests.RequestException, ValueError) as exc:
        _discard_partial(destination)
        raise FetchTransportError(url, exc) from exc
    except OSError:
        _discard_partial(destination)
        raise
    return AssetStatus.DOWNLOADED
