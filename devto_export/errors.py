"""Exception types raised while exporting articles."""

from __future__ import annotations

from typing import Optional


class ExportError(Exception):
    """Base exception for export failures."""


class InputParseError(ExportError):
    """Raised when the input collection cannot be read or parsed."""


class UrlMalformedError(ExportError):
    """Raised when a media reference cannot be turned into a local filename."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL '{url}': {reason}")
        self.url = url
        self.reason = reason


class FetchError(ExportError):
    """Base exception for a failed asset download."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class FetchHttpError(FetchError):
    """Raised when the server answers with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(url, f"Failed to get '{url}' ({status_code})")
        self.status_code = status_code


class FetchTransportError(FetchError):
    """Raised when the request fails before a complete response is stored."""

    def __init__(self, url: str, cause: Optional[BaseException]) -> None:
        super().__init__(url, f"Failed to get '{url}': {cause}")
        self.cause = cause


class FilesystemError(ExportError):
    """Raised when an article directory or output file cannot be written."""
