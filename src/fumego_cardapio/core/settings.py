
"""Configurações Pydantic Settings da integração com o Cardápio Web."""
from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from .errors import ConfigurationError

class Settings(BaseSettings):
    """Configurações da aplicação. Carrega de env e .env.

    Token e loja são lidos a cada requisição; a ausência só é tratada
    como erro quando algum endpoint precisa falar com o Cardápio Web.
    """
    model_config = SettingsConfigDict(env_file=".env", env_prefix="CARDAPIO_WEB_", case_sensitive=False, extra="ignore")

    # Flask
    flask_debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    # Cardápio Web (API aberta)
    token: str | None = Field(default=None, description="Token Bearer da API do Cardápio Web")
    store_id: str | None = Field(default=None, description="ID da loja usado no path /v1/stores/{id}")
    api_url: str = Field(default="https://api.cardapioweb.com")
    http_timeout_s: float | None = Field(default=None, description="Timeout das chamadas; None desliga")

    # Pedidos
    order_origin: str = Field(default="site_fumego")
    order_id_prefix: str = Field(default="FMG")
    default_delivery_fee: float = Field(default=10.0)

    def credentials(self) -> tuple[str, str]:
        """Retorna (token, store_id) ou levanta ConfigurationError."""
        if not self.token or not self.store_id:
            raise ConfigurationError()
        return self.token, self.store_id
