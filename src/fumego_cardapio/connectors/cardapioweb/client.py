
"""Cliente HTTP da API aberta do Cardápio Web (módulos Catálogo e Pedidos)."""
from __future__ import annotations
from typing import Any
import httpx
from kink import di
from ...core.settings import Settings
from ...core.errors import TransportError, UpstreamError
from ...ports.interfaces import UpstreamOrderDTO

class CardapioWebClient:
    """Cliente para a API do Cardápio Web.

    Uma instância por requisição; cada chamada abre e fecha seu httpx.Client.
    `transport` permite trocar a camada de rede (ex.: httpx.MockTransport).
    """
    def __init__(self, settings: Settings | None = None, transport: httpx.BaseTransport | None = None):
        self.s = settings or di[Settings]
        self.token, self.store_id = self.s.credentials()
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.s.api_url,
            timeout=self.s.http_timeout_s,
            transport=self.transport,
            headers={"Authorization": f"Bearer {self.token}", "Accept": "application/json"},
        )

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            with self._client() as cli:
                return cli.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

    def fetch_catalog(self) -> Any:
        """GET /v1/stores/{id}/catalog; retorna o JSON do catálogo como veio."""
        r = self._request("GET", f"/v1/stores/{self.store_id}/catalog")
        if r.status_code // 100 != 2:
            raise UpstreamError(r.status_code, _json_or_empty(r))
        try:
            return r.json()
        except ValueError as exc:
            raise TransportError(f"catálogo ilegível: {exc}") from exc

    def post_order(self, order: UpstreamOrderDTO) -> Any:
        """POST /v1/stores/{id}/orders; retorna o corpo da resposta ({} se ilegível)."""
        r = self._request("POST", f"/v1/stores/{self.store_id}/orders", json=order.to_wire())
        body = _json_or_empty(r)
        if r.status_code // 100 != 2:
            raise UpstreamError(r.status_code, body)
        return body

def _json_or_empty(r: httpx.Response) -> Any:
    """Corpo JSON da resposta, ou {} quando vazio ou inválido."""
    try:
        return r.json()
    except ValueError:
        return {}
