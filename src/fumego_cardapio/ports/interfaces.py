
"""Portas (interfaces) e DTOs: pedido do site, pedido do Cardápio Web e webhook."""
from __future__ import annotations
from typing import Any, Protocol
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# ---------- Entrada (frontend Fumêgo) ----------
class _Lenient(BaseModel):
    """Valores repassados ao Cardápio Web como vieram; só a estrutura é exigida.

    Um objeto esperado que chega como outra coisa (ex.: customer="Ana") vira
    vazio e cai nas checagens de presença do order_service.
    """
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _only_objects(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}

class CustomerIn(_Lenient):
    name: Any = None
    phone: Any = None
    cpf: Any = None

class AddressIn(_Lenient):
    street: Any = None
    number: Any = None
    complement: Any = None
    neighborhood: Any = None
    city: Any = None
    zip_code: Any = Field(default=None, validation_alias=AliasChoices("zipCode", "zip_code"))
    reference: Any = None

class SubItemIn(_Lenient):
    """Complemento/bebida de um item."""
    name: Any = None
    quantity: Any = Field(default=None, validation_alias=AliasChoices("qty", "quantity"))
    price: Any = None

class ItemIn(_Lenient):
    name: Any = None
    quantity: Any = None
    price: Any = None
    observations: Any = Field(default=None, validation_alias=AliasChoices("observations", "observation"))
    # lista de SubItemIn; checada só na remodelagem, depois das validações de presença
    drinks: Any = Field(default=None, validation_alias=AliasChoices("drinks", "subItems"))

class IncomingOrderDTO(_Lenient):
    """Pedido como chega do site; presença de campos é checada pelo order_service."""
    customer: CustomerIn | None = None
    address: AddressIn | None = None
    items: list[ItemIn] | None = None
    payment_method: Any = Field(default=None, validation_alias=AliasChoices("paymentMethod", "payment_method"))
    change: Any = None
    delivery_fee: Any = Field(default=None, validation_alias=AliasChoices("deliveryFee", "delivery_fee"))
    discount: Any = None
    observations: Any = None

# ---------- Saída (schema do Cardápio Web) ----------
class _Upstream(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON no formato da API: camelCase e sem chaves ausentes."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

class UpstreamCustomer(_Upstream):
    name: Any
    phone: Any
    document: Any = ""

class UpstreamAddress(_Upstream):
    street: Any
    number: Any
    complement: Any = ""
    neighborhood: Any = None
    city: Any = None
    zip_code: Any = ""
    reference: Any = ""

class UpstreamSubItem(_Upstream):
    name: Any = None
    quantity: Any = None
    price: Any = None

class UpstreamItem(_Upstream):
    name: Any = None
    quantity: Any = 1
    price: Any = None
    observation: Any = ""
    sub_items: list[UpstreamSubItem] = Field(default_factory=list)

class UpstreamPayment(_Upstream):
    method: str
    change: Any = 0

class UpstreamOrderDTO(_Upstream):
    """Pedido remodelado para POST /v1/stores/{id}/orders."""
    customer: UpstreamCustomer
    delivery_address: UpstreamAddress
    items: list[UpstreamItem]
    payment: UpstreamPayment
    delivery_fee: Any = 10.0
    discount: Any = 0
    observations: Any = ""
    origin: str
    created_at: str

class UpstreamOrderResultDTO(BaseModel):
    """Resultado padronizado do envio ao Cardápio Web."""
    success: bool
    order_id: str
    data: Any = Field(default_factory=dict)

# ---------- Webhook ----------
class WebhookEventDTO(BaseModel):
    """Notificação de status; campos extras do Cardápio Web são preservados."""
    model_config = ConfigDict(extra="allow")
    type: Any = None
    event: Any = None
    order_id: Any = Field(default=None, validation_alias=AliasChoices("orderId", "order_id"))

    @property
    def kind(self) -> Any:
        """Tipo do evento: `type`, ou o campo legado `event`."""
        return self.type or self.event

# ---------- Portas ----------
class CatalogPort(Protocol):
    def fetch_catalog(self) -> Any: ...

class OrderPort(Protocol):
    def post_order(self, order: UpstreamOrderDTO) -> Any: ...
