
"""Infra de logging JSON usando structlog, com trace_id contextual por requisição."""
from __future__ import annotations
import logging
import structlog
import sys
from uuid import uuid4
from contextvars import ContextVar

trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="-")

def set_trace_id(value: str | None = None) -> str:
    """Define trace_id no contexto atual e retorna o valor definido."""
    tid = value or uuid4().hex
    trace_id_ctx.set(tid)
    return tid

def get_trace_id() -> str:
    return trace_id_ctx.get()

def _add_trace_id(_, __, event_dict: dict) -> dict:
    event_dict["trace_id"] = trace_id_ctx.get()
    return event_dict

def configure_logging(level: str = "INFO") -> None:
    """Configura structlog para emitir JSON em stdout a partir de `level`."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            _add_trace_id,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
    )

def get_logger() -> structlog.stdlib.BoundLogger:
    """Logger JSON com trace_id injetado automaticamente."""
    return structlog.get_logger()
