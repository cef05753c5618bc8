"""Shared fixtures for exporter tests."""

from typing import Dict, List, Union
from unittest.mock import MagicMock

import pytest
import requests


def make_response(status_code: int = 200, body: bytes = b"image-bytes") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.iter_content.return_value = [body]
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    return resp


class FakeSession:
    """Stand-in for requests.Session keyed by URL."""

    def __init__(self) -> None:
        self.routes: Dict[str, Union[MagicMock, Exception]] = {}
        self.calls: List[str] = []
        self.closed = False

    def add(self, url: str, status_code: int = 200, body: bytes = b"image-bytes") -> None:
        self.routes[url] = make_response(status_code, body)

    def fail(self, url: str, exc: Exception) -> None:
        self.routes[url] = exc

    def get(self, url: str, **kwargs):
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return make_response(404, b"")
        if isinstance(route, Exception):
            raise route
        return route

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("Name or service not known")
