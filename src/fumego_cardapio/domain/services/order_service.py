
"""Serviço de pedidos: validação, remodelagem para o Cardápio Web e envio.

As funções de validação e transformação são puras (sem rede); só
`submit_order` fala com o upstream, via a porta `OrderPort`.
"""
from __future__ import annotations
import time
from datetime import datetime, timezone
from typing import Any
from ...core.errors import OrderValidationError
from ...core.logging import get_logger
from ...ports.interfaces import (
    IncomingOrderDTO, OrderPort, SubItemIn, UpstreamAddress, UpstreamCustomer, UpstreamItem,
    UpstreamOrderDTO, UpstreamOrderResultDTO, UpstreamPayment, UpstreamSubItem,
)

log = get_logger()

PAYMENT_METHODS = {
    "pix": "PIX",
    "credito": "CREDIT_CARD",
    "debito": "DEBIT_CARD",
    "dinheiro": "CASH",
}
DEFAULT_PAYMENT_METHOD = "CASH"
DEFAULT_DELIVERY_FEE = 10.0

EMPTY_ORDER = "Pedido vazio. Adicione pelo menos um item."
INCOMPLETE_CUSTOMER = "Dados do cliente incompletos."
INCOMPLETE_ADDRESS = "Endereço de entrega incompleto."

def map_payment_method(method: Any) -> str:
    """Mapeia o método do site para o enum do Cardápio Web; desconhecido vira CASH."""
    code = PAYMENT_METHODS.get(method) if isinstance(method, str) else None
    if code is None:
        if method:
            # mantido silencioso para o cliente; só registramos
            log.warning("payment_method_unknown", method=method, fallback=DEFAULT_PAYMENT_METHOD)
        return DEFAULT_PAYMENT_METHOD
    return code

def validate_order(order: IncomingOrderDTO) -> None:
    """Checa, em ordem, itens, cliente e endereço. Levanta OrderValidationError."""
    if not order.items:
        raise OrderValidationError(EMPTY_ORDER)
    c = order.customer
    if c is None or not c.name or not c.phone:
        raise OrderValidationError(INCOMPLETE_CUSTOMER)
    a = order.address
    if a is None or not a.street or not a.number:
        raise OrderValidationError(INCOMPLETE_ADDRESS)

def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC com milissegundos e sufixo Z (ex.: 2024-01-01T12:00:00.000Z)."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def _sub_items(drinks: Any, index: int) -> list[UpstreamSubItem]:
    if not drinks:
        return []
    if not isinstance(drinks, list):
        raise OrderValidationError(
            "Pedido inválido.",
            [{"loc": ["items", str(index), "drinks"], "msg": "Input should be a valid list"}],
        )
    subs = [SubItemIn.model_validate(d) for d in drinks]
    return [UpstreamSubItem(name=d.name, quantity=d.quantity, price=d.price) for d in subs]

def build_upstream_order(
    order: IncomingOrderDTO,
    *,
    origin: str = "site_fumego",
    default_delivery_fee: float = DEFAULT_DELIVERY_FEE,
    now: datetime | None = None,
) -> UpstreamOrderDTO:
    """Monta o pedido no formato do Cardápio Web. Espera um pedido já validado."""
    c, a = order.customer, order.address
    items = [
        UpstreamItem(
            name=it.name,
            quantity=it.quantity or 1,
            price=it.price,
            observation=it.observations or "",
            sub_items=_sub_items(it.drinks, index),
        )
        for index, it in enumerate(order.items or [])
    ]
    return UpstreamOrderDTO(
        customer=UpstreamCustomer(name=c.name, phone=c.phone, document=c.cpf or ""),
        delivery_address=UpstreamAddress(
            street=a.street,
            number=a.number,
            complement=a.complement or "",
            neighborhood=a.neighborhood,
            city=a.city,
            zip_code=a.zip_code or "",
            reference=a.reference or "",
        ),
        items=items,
        payment=UpstreamPayment(method=map_payment_method(order.payment_method), change=order.change or 0),
        delivery_fee=default_delivery_fee if order.delivery_fee is None else order.delivery_fee,
        discount=order.discount or 0,
        observations=order.observations or "",
        origin=origin,
        created_at=utc_timestamp(now),
    )

def resolve_order_id(body: Any, prefix: str = "FMG", now_ms: int | None = None) -> str:
    """`id` do upstream > `orderId` do upstream > `<prefix>-<epoch ms>` gerado aqui."""
    if isinstance(body, dict):
        for key in ("id", "orderId"):
            if body.get(key):
                return str(body[key])
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{prefix}-{now_ms}"

def submit_order(upstream: UpstreamOrderDTO, port: OrderPort, *, id_prefix: str = "FMG") -> UpstreamOrderResultDTO:
    """Envia o pedido já remodelado. UpstreamError/TransportError sobem para o chamador."""
    log.info("order_submitting", order=upstream.to_wire())
    body = port.post_order(upstream)
    result = UpstreamOrderResultDTO(success=True, order_id=resolve_order_id(body, id_prefix), data=body)
    log.info("order_created", order_id=result.order_id, response=body)
    return result
