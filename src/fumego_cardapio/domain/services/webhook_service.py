
"""Tratamento dos webhooks de status do Cardápio Web (apenas observabilidade)."""
from __future__ import annotations
from ...core.logging import get_logger
from ...ports.interfaces import WebhookEventDTO

log = get_logger()

# tipo do evento -> (nome do evento de log, mensagem)
STATUS_EVENTS: dict[str, tuple[str, str]] = {
    "order.confirmed": ("order_confirmed", "Pedido {order_id} confirmado pelo restaurante"),
    "order.preparing": ("order_preparing", "Pedido {order_id} em preparo"),
    "order.ready": ("order_ready", "Pedido {order_id} pronto para entrega"),
    "order.delivering": ("order_delivering", "Pedido {order_id} saiu para entrega"),
    "order.delivered": ("order_delivered", "Pedido {order_id} entregue"),
    "order.cancelled": ("order_cancelled", "Pedido {order_id} cancelado"),
}

def handle_event(event: WebhookEventDTO) -> str | None:
    """Registra o evento e retorna o tipo reconhecido, ou None se desconhecido.

    Campos com tipos inesperados (objetos, listas, booleanos) nunca rejeitam o
    evento; só são convertidos para texto no log.
    """
    log.info("webhook_received", payload=event.model_dump(mode="json"))
    kind = event.kind
    entry = STATUS_EVENTS.get(kind) if isinstance(kind, str) else None
    if entry is None:
        log.info("webhook_unknown_event", event_type=str(kind) if kind else "sem tipo")
        return None
    name, template = entry
    order_id = event.order_id if event.order_id is None else str(event.order_id)
    log.info(name, order_id=order_id, message=template.format(order_id=order_id))
    return kind
