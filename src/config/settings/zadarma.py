"""Settings específicas da Zadarma.

Configurações do conector de telefonia (API REST + webhooks).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

EVENT_PREFIX: str = "NOTIFY_"


@dataclass(frozen=True)
class ZadarmaSettings:
    """Configurações da Zadarma.

    Attributes:
        api_key: Chave de API da conta
        api_secret: Secret da conta (assina requisições e webhooks)
        sandbox: Usa a origem sandbox em vez de produção
        request_timeout_seconds: Timeout para requisições HTTP
        webhook_events: Allow-list de eventos de webhook (vazio = todos)
        webhook_require_signature: Rejeita webhooks sem header Signature
    """

    api_key: str = ""
    api_secret: str = field(default="", repr=False)
    sandbox: bool = False
    request_timeout_seconds: float = 30.0
    webhook_events: tuple[str, ...] = ()
    webhook_require_signature: bool = True

    @property
    def event_filter(self) -> tuple[str, ...] | None:
        """Allow-list para verify_webhook_event (None = todos)."""
        return self.webhook_events or None

    def validate(self) -> list[str]:
        """Valida configurações mínimas da Zadarma.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("ZADARMA_API_KEY não configurado")
        elif ":" in self.api_key:
            errors.append("ZADARMA_API_KEY não pode conter ':'")

        if not self.api_secret:
            errors.append("ZADARMA_API_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("ZADARMA_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        unknown = [event for event in self.webhook_events if not event.startswith(EVENT_PREFIX)]
        if unknown:
            errors.append(f"ZADARMA_WEBHOOK_EVENTS desconhecidos: {', '.join(unknown)}")

        return errors


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _parse_events(value: str) -> tuple[str, ...]:
    return tuple(item.strip().upper() for item in value.split(",") if item.strip())


def _load_from_env() -> ZadarmaSettings:
    """Carrega ZadarmaSettings a partir de variáveis de ambiente."""
    return ZadarmaSettings(
        api_key=os.getenv("ZADARMA_API_KEY", ""),
        api_secret=os.getenv("ZADARMA_API_SECRET", ""),
        sandbox=_parse_bool(os.getenv("ZADARMA_SANDBOX", "false")),
        request_timeout_seconds=float(
            os.getenv("ZADARMA_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        webhook_events=_parse_events(os.getenv("ZADARMA_WEBHOOK_EVENTS", "")),
        webhook_require_signature=_parse_bool(
            os.getenv("ZADARMA_WEBHOOK_REQUIRE_SIGNATURE", "true")
        ),
    )


@lru_cache(maxsize=1)
def get_zadarma_settings() -> ZadarmaSettings:
    """Retorna instância cacheada de ZadarmaSettings."""
    return _load_from_env()
