
"""API Flask: proxy do catálogo, envio de pedidos e webhook de status do Cardápio Web."""
from __future__ import annotations
from flask import Flask, request, jsonify
from flask_cors import CORS
from kink import di
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException, MethodNotAllowed
from ..core.di import bootstrap_di
from ..core.errors import ConfigurationError, IntegrationError, OrderValidationError, TransportError, UpstreamError
from ..core.logging import set_trace_id, get_trace_id, get_logger
from ..core.settings import Settings
from ..connectors.cardapioweb.client import CardapioWebClient
from ..domain.services import order_service, webhook_service
from ..ports.interfaces import CatalogPort, IncomingOrderDTO, WebhookEventDTO

app = Flask(__name__)
app.json.ensure_ascii = False
bootstrap_di()
log = get_logger()

# rota -> métodos anunciados no CORS
CORS_METHODS = {
    "/catalog": ["GET", "OPTIONS"],
    "/send-order": ["POST", "OPTIONS"],
    "/webhook": ["POST", "OPTIONS"],
}
CORS_HEADERS = ["Content-Type"]

@app.after_request
def _cors_headers(response):
    """Completa os headers CORS em toda resposta das rotas públicas, não só no preflight."""
    methods = CORS_METHODS.get(request.path)
    if methods:
        response.headers.setdefault("Access-Control-Allow-Methods", ", ".join(methods))
        response.headers.setdefault("Access-Control-Allow-Headers", ", ".join(CORS_HEADERS))
    return response

# registrado depois do hook acima para rodar antes dele
CORS(
    app,
    resources={path: {"methods": methods} for path, methods in CORS_METHODS.items()},
    origins="*",
    send_wildcard=True,
    allow_headers=CORS_HEADERS,
)

@app.before_request
def _trace():
    set_trace_id(request.headers.get("X-Trace-Id"))

@app.after_request
def _trace_header(response):
    response.headers["X-Trace-Id"] = get_trace_id()
    return response

@app.errorhandler(MethodNotAllowed)
def method_not_allowed(exc: MethodNotAllowed):
    allowed = [m for m in (exc.valid_methods or []) if m not in ("HEAD", "OPTIONS")]
    return jsonify({"error": f"Método não permitido. Use {', '.join(sorted(allowed))}."}), 405

@app.errorhandler(IntegrationError)
def integration_error(exc: IntegrationError):
    """Erros de configuração e validação viram JSON com o status do erro."""
    if isinstance(exc, ConfigurationError):
        log.error("config_missing", path=request.path)
    return jsonify(exc.to_payload()), exc.status_code

@app.errorhandler(Exception)
def unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    log.exception("unhandled_error", path=request.path)
    return jsonify({"error": "Erro interno do servidor", "message": str(exc)}), 500

@app.get("/healthz")
def healthz():
    """Health check básico."""
    return {"ok": True}

@app.get("/catalog")
def catalog():
    """Consulta o catálogo da loja no Cardápio Web e devolve como veio."""
    try:
        client: CatalogPort = di[CardapioWebClient]
    except ConfigurationError:
        log.error("config_missing", path=request.path)
        return jsonify({"error": "Credenciais não configuradas"}), 500
    try:
        data = client.fetch_catalog()
    except UpstreamError as exc:
        log.error("catalog_upstream_error", status=exc.status_code, details=exc.details)
        return jsonify({"error": "Erro ao consultar catálogo"}), exc.status_code
    except TransportError as exc:
        log.exception("catalog_failed")
        return jsonify({"error": str(exc)}), 500
    return jsonify({"success": True, "catalog": data}), 200

@app.post("/send-order")
def send_order():
    """Valida o pedido do site, remodela e envia para o Cardápio Web.

    Se o upstream recusar, devolve o pedido remodelado com `fallback: true`
    para que o site possa tentar de novo ou guardar localmente.
    """
    s = di[Settings]
    client = di[CardapioWebClient]
    raw = request.get_json(silent=True)
    try:
        pedido = IncomingOrderDTO.model_validate(raw if isinstance(raw, dict) else {})
    except ValidationError as exc:
        details = [{"loc": [str(p) for p in e["loc"]], "msg": e["msg"]} for e in exc.errors()]
        raise OrderValidationError("Pedido inválido.", details) from exc
    order_service.validate_order(pedido)

    upstream = order_service.build_upstream_order(
        pedido, origin=s.order_origin, default_delivery_fee=s.default_delivery_fee,
    )
    try:
        result = order_service.submit_order(upstream, client, id_prefix=s.order_id_prefix)
    except UpstreamError as exc:
        log.error("order_upstream_error", status=exc.status_code, details=exc.details)
        return jsonify({
            "error": "Erro ao enviar pedido para o sistema",
            "details": exc.details,
            "fallback": True,
            "order": upstream.to_wire(),
        }), exc.status_code
    except TransportError as exc:
        log.exception("order_failed")
        return jsonify({"error": "Erro interno do servidor", "message": str(exc)}), 500

    return jsonify({
        "success": result.success,
        "message": "Pedido enviado com sucesso!",
        "orderId": result.order_id,
        "data": result.data,
    }), 201

@app.post("/webhook")
def webhook():
    """Recebe atualizações de status; sempre confirma o recebimento."""
    try:
        evento = WebhookEventDTO.model_validate(request.get_json(silent=True))
        webhook_service.handle_event(evento)
    except ValidationError as exc:
        log.exception("webhook_failed")
        return jsonify({"error": str(exc)}), 500
    return jsonify({"received": True}), 200

def main() -> None:
    """Sobe o servidor de desenvolvimento do Flask com host/porta das settings."""
    s = di[Settings]
    app.run(host=s.host, port=s.port, debug=s.flask_debug)
