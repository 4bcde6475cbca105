"""Extração de telemetria de rate limit dos headers de resposta."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from .errors import TransportError

RATE_LIMIT_HEADER_PREFIX = "x-ratelimit-"

RateLimitSnapshot = dict[str, int]

_INTEGER_RE = re.compile(r"[0-9]+")


def parse_rate_limits(
    headers: Mapping[str, str] | Iterable[tuple[str, str]],
) -> RateLimitSnapshot:
    """Monta snapshot ``{sufixo: inteiro}`` a partir de ``X-RateLimit-*``.

    Args:
        headers: Headers da resposta (mapping ou pares)

    Returns:
        Snapshot novo (não acumula entre chamadas)

    Raises:
        TransportError: Se algum valor não for inteiro ASCII sem sinal
    """
    items = headers.items() if isinstance(headers, Mapping) else headers
    snapshot: RateLimitSnapshot = {}
    for name, value in items:
        lowered = name.lower()
        if not lowered.startswith(RATE_LIMIT_HEADER_PREFIX):
            continue
        limit_name = lowered[len(RATE_LIMIT_HEADER_PREFIX):]
        # int() aceitaria "+58", "5_8" e dígitos unicode
        if not _INTEGER_RE.fullmatch(value):
            raise TransportError(f"invalid_rate_limit_header: {name}")
        snapshot[limit_name] = int(value)
    return snapshot
