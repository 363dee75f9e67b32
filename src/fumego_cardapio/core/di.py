
"""Bootstrap do container de DI (kink): settings e cliente do Cardápio Web por requisição."""
from kink import di
from .settings import Settings
from .logging import configure_logging
from ..connectors.cardapioweb.client import CardapioWebClient

def bootstrap_di() -> None:
    # factories: o env é relido a cada resolução
    di.factories[Settings] = lambda c: Settings()
    di.factories[CardapioWebClient] = lambda c: CardapioWebClient(c[Settings])
    configure_logging(Settings().log_level)
