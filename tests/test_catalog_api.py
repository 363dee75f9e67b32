from __future__ import annotations

from kink import di

from fumego_cardapio.connectors.cardapioweb.client import CardapioWebClient
from fumego_cardapio.ports.interfaces import CatalogPort


def test_catalog_returns_upstream_body(client, upstream) -> None:
    catalog = {"categories": [{"name": "Pizzas", "items": [{"name": "Calabresa"}]}]}
    upstream.reply(200, json=catalog)

    response = client.get("/catalog")
    assert response.status_code == 200
    assert response.get_json() == {"success": True, "catalog": catalog}

    request = upstream.calls[0]
    assert request.method == "GET"
    assert str(request.url) == "https://cw.test/v1/stores/loja-1/catalog"
    assert request.headers["Authorization"] == "Bearer tok-test"
    assert request.headers["Accept"] == "application/json"


def test_catalog_propagates_upstream_status(client, upstream) -> None:
    upstream.reply(401, json={"message": "unauthorized"})
    response = client.get("/catalog")
    assert response.status_code == 401
    assert response.get_json() == {"error": "Erro ao consultar catálogo"}


def test_catalog_network_failure_is_500(client, upstream) -> None:
    upstream.fail("timed out")
    response = client.get("/catalog")
    assert response.status_code == 500
    assert response.get_json() == {"error": "timed out"}


def test_catalog_unreadable_body_is_500(client, upstream) -> None:
    upstream.reply(200, content=b"not json")
    response = client.get("/catalog")
    assert response.status_code == 500
    assert "catálogo ilegível" in response.get_json()["error"]


def test_catalog_without_store_id_is_500(client, upstream, monkeypatch) -> None:
    monkeypatch.delenv("CARDAPIO_WEB_STORE_ID")
    response = client.get("/catalog")
    assert response.status_code == 500
    assert response.get_json() == {"error": "Credenciais não configuradas"}
    assert upstream.calls == []


def test_catalog_rejects_post(client, upstream) -> None:
    response = client.post("/catalog", json={})
    assert response.status_code == 405
    assert response.get_json() == {"error": "Método não permitido. Use GET."}
    assert upstream.calls == []


def test_catalog_options_is_empty_200(client) -> None:
    response = client.options("/catalog")
    assert response.status_code == 200
    assert response.data == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_catalog_preflight_advertises_get(client) -> None:
    response = client.options(
        "/catalog",
        headers={"Origin": "https://fumego.test", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert "GET" in response.headers["Access-Control-Allow-Methods"]
    assert "POST" not in response.headers["Access-Control-Allow-Methods"]


def test_healthz(client) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    assert response.headers["X-Trace-Id"]


def test_trace_id_is_echoed(client) -> None:
    response = client.get("/healthz", headers={"X-Trace-Id": "abc123"})
    assert response.headers["X-Trace-Id"] == "abc123"


def test_catalog_responses_carry_all_cors_headers(client, upstream) -> None:
    upstream.reply(200, json={})
    for response in (client.options("/catalog"), client.get("/catalog")):
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"


def test_catalog_is_typed_against_catalog_port(upstream) -> None:
    upstream.reply(200, json={"categories": []})
    port: CatalogPort = di[CardapioWebClient]
    assert port.fetch_catalog() == {"categories": []}
