"""Shared fixtures: a fake BitX server built on httpx.MockTransport."""

from typing import Any, Callable, Optional

import httpx
import pytest

from bitx_sdk import BitXAuth, BitXClient, NoopLogger

BASE_URL = "https://api.mybitx.com/api/1/"


class FakeBitX:
    """Records every request and answers with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._reply: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def reply_json(self, body: Any, status: int = 200) -> None:
        self._reply = lambda request: httpx.Response(status, json=body)

    def reply_raw(self, content: bytes, status: int = 200) -> None:
        self._reply = lambda request: httpx.Response(status, content=content)

    def fail_with(self, exc_type: type[httpx.TransportError], message: str = "boom") -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_type(message, request=request)

        self._reply = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._reply(request)

    @property
    def last(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake():
    """A fresh fake server."""
    return FakeBitX()


@pytest.fixture
def client(fake):
    """A client wired to the fake server."""
    return BitXClient(base_url=BASE_URL, logger=NoopLogger(), transport=fake.transport())


@pytest.fixture
def auth():
    """A sample credential."""
    return BitXAuth(id="46793", secret="387ffBd56eEAA7C59")
