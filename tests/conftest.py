from __future__ import annotations

import httpx
import pytest
from kink import di

from fumego_cardapio.api.app import app
from fumego_cardapio.connectors.cardapioweb.client import CardapioWebClient
from fumego_cardapio.core.settings import Settings


class FakeUpstream:
    """Handler de httpx.MockTransport que grava as requisições recebidas."""

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self._respond = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self._respond(request)

    def reply(self, status: int, json: object = None, content: bytes | None = None) -> None:
        if content is not None:
            self._respond = lambda request: httpx.Response(status, content=content)
        else:
            self._respond = lambda request: httpx.Response(status, json=json)

    def fail(self, message: str) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(message, request=request)

        self._respond = _raise


@pytest.fixture(autouse=True)
def cardapio_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARDAPIO_WEB_TOKEN", "tok-test")
    monkeypatch.setenv("CARDAPIO_WEB_STORE_ID", "loja-1")
    monkeypatch.setenv("CARDAPIO_WEB_API_URL", "https://cw.test")


@pytest.fixture(autouse=True)
def upstream(monkeypatch: pytest.MonkeyPatch) -> FakeUpstream:
    fake = FakeUpstream()
    monkeypatch.setitem(
        di.factories,
        CardapioWebClient,
        lambda c: CardapioWebClient(c[Settings], transport=httpx.MockTransport(fake)),
    )
    return fake


@pytest.fixture
def client():
    app.config.update(TESTING=True)
    return app.test_client()


@pytest.fixture
def pizza_order() -> dict:
    return {
        "items": [{"name": "Pizza", "price": 30, "quantity": 1}],
        "customer": {"name": "Ana", "phone": "11999999999"},
        "address": {"street": "Rua A", "number": "10"},
    }
