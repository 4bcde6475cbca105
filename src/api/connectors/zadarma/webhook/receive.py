"""Verificação de eventos de webhook recebidos (sem PII nos logs).

Entregas forjadas ou malformadas NUNCA levantam exceção: o resultado é um
WebhookVerification com outcome negativo, tratado como fluxo normal.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .events import (
    MissingSignedFieldError,
    NotifyEvent,
    WebhookEvent,
    build_event,
    parse_event_tag,
)
from .signature import compute_webhook_signature, signatures_match

logger = logging.getLogger(__name__)


class VerificationOutcome(StrEnum):
    """Resultado da verificação de um webhook."""

    ACCEPTED = "accepted"
    UNVERIFIED = "unverified"
    UNKNOWN_EVENT = "unknown_event"
    FILTERED = "filtered"
    SIGNATURE_MISMATCH = "signature_mismatch"
    INVALID_PAYLOAD = "invalid_payload"


_NOT_APPLICABLE = frozenset({VerificationOutcome.UNKNOWN_EVENT, VerificationOutcome.FILTERED})
_REJECTED = frozenset(
    {VerificationOutcome.SIGNATURE_MISMATCH, VerificationOutcome.INVALID_PAYLOAD}
)


@dataclass(frozen=True)
class WebhookVerification:
    """Resultado tipado da verificação.

    Attributes:
        outcome: Classificação do resultado
        event: Evento tipado (somente ACCEPTED/UNVERIFIED)
        tag: Tag reconhecida, quando houver
    """

    outcome: VerificationOutcome
    event: WebhookEvent | None = None
    tag: NotifyEvent | None = None

    @property
    def is_applicable(self) -> bool:
        """False quando o evento deve ser ignorado silenciosamente."""
        return self.outcome not in _NOT_APPLICABLE

    @property
    def is_rejected(self) -> bool:
        return self.outcome in _REJECTED

    @property
    def is_authentic(self) -> bool:
        """True apenas quando a assinatura foi conferida."""
        return self.outcome is VerificationOutcome.ACCEPTED


def verify_webhook_event(
    payload: Mapping[str, Any] | None,
    secret: str,
    signature: str | None = None,
    event_filter: Collection[str] | None = None,
) -> WebhookVerification:
    """Valida assinatura e constrói o evento tipado.

    Args:
        payload: Campos do webhook (form ou JSON já decodificado)
        secret: Secret da conta
        signature: Header ``Signature``; None/vazio pula a verificação
        event_filter: Allow-list de tags; None aceita todas

    Returns:
        WebhookVerification (nunca levanta para entregas inválidas)
    """
    if not payload:
        return WebhookVerification(VerificationOutcome.UNKNOWN_EVENT)

    tag = parse_event_tag(payload)
    if tag is None:
        logger.debug("webhook_event_unknown")
        return WebhookVerification(VerificationOutcome.UNKNOWN_EVENT)

    if event_filter is not None and tag not in {str(item) for item in event_filter}:
        logger.debug("webhook_event_filtered", extra={"event": str(tag)})
        return WebhookVerification(VerificationOutcome.FILTERED, tag=tag)

    try:
        expected = compute_webhook_signature(tag, payload, secret)
        event = build_event(tag, payload)
    except MissingSignedFieldError as exc:
        logger.warning(
            "webhook_payload_invalid",
            extra={"event": str(tag), "missing_field": str(exc)},
        )
        return WebhookVerification(VerificationOutcome.INVALID_PAYLOAD, tag=tag)

    if not signature:
        return WebhookVerification(VerificationOutcome.UNVERIFIED, event=event, tag=tag)

    if not signatures_match(expected, signature):
        logger.warning("webhook_signature_mismatch", extra={"event": str(tag)})
        return WebhookVerification(VerificationOutcome.SIGNATURE_MISMATCH, tag=tag)

    return WebhookVerification(VerificationOutcome.ACCEPTED, event=event, tag=tag)
