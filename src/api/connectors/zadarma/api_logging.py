"""Helpers de logging para a API Zadarma (sem PII, sem credenciais)."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_api_failure(
    kind: str,
    verb: str,
    path: str,
    status_code: int | None,
) -> None:
    """Loga falha classificada sem expor payload ou credenciais."""
    logger.warning(
        "zadarma_call_failed",
        extra={
            "failure_kind": kind,
            "method": verb,
            "endpoint": path,
            "status_code": status_code,
        },
    )


def log_success(
    verb: str,
    path: str,
    status_code: int,
    rate_limits: dict[str, int],
) -> None:
    """Loga sucesso com telemetria de rate limit."""
    logger.debug(
        "zadarma_call_succeeded",
        extra={
            "method": verb,
            "endpoint": path,
            "status_code": status_code,
            "rate_limits": rate_limits,
        },
    )
