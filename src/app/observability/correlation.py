"""correlation_id por requisição, propagado para os logs estruturados.

Para webhooks de telefonia o ``pbx_call_id`` da chamada é um bom
correlation_id: todos os eventos NOTIFY_* da mesma chamada compartilham
o valor, então os logs de START/ANSWER/END/RECORD ficam agrupados.

Uso:
    token = set_correlation_id(
        resolve_correlation_id(request.headers.get(CORRELATION_HEADER), pbx_call_id)
    )
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

CORRELATION_HEADER = "x-correlation-id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ("" se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None/vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def resolve_correlation_id(*candidates: object) -> str:
    """Primeiro candidato string não vazio; senão um UUID novo.

    Ordem típica: header ``x-correlation-id`` e depois ``pbx_call_id``.
    """
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return generate_correlation_id()
