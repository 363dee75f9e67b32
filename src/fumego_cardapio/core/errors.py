
"""Erros da integração: configuração, validação, upstream e transporte."""
from __future__ import annotations
from typing import Any

class IntegrationError(Exception):
    """Base: todo erro vira um corpo JSON com o campo `error`."""
    status_code: int = 500

    def __init__(self, error: str, message: str | None = None):
        super().__init__(message or error)
        self.error = error
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body

class ConfigurationError(IntegrationError):
    """Token ou ID da loja ausentes."""
    status_code = 500

    def __init__(self):
        super().__init__(
            "Servidor não configurado",
            "As credenciais da API do Cardápio Web não foram configuradas.",
        )

class OrderValidationError(IntegrationError):
    """Pedido de entrada malformado; nunca chega ao upstream."""
    status_code = 400

    def __init__(self, error: str, details: list[dict] | None = None):
        super().__init__(error)
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body

class UpstreamError(IntegrationError):
    """Resposta não-2xx do Cardápio Web, com status e corpo originais."""

    def __init__(self, status_code: int, details: Any):
        super().__init__(f"Cardápio Web respondeu {status_code}")
        self.status_code = status_code
        self.details = details

class TransportError(IntegrationError):
    """Falha de rede ou corpo de sucesso ilegível."""
    status_code = 500
