"""Assinatura HMAC-SHA1 dos webhooks Zadarma.

Diferente da assinatura de requisições (base64 do hex), aqui o base64 é
aplicado sobre os BYTES CRUS do HMAC.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Mapping
from typing import Any

from .events import NotifyEvent, signature_string

SIGNATURE_HEADER = "Signature"


def compute_signature(message: str, secret: str) -> str:
    """Base64 dos bytes crus de HMAC-SHA1(secret, message)."""
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def compute_webhook_signature(
    tag: NotifyEvent,
    payload: Mapping[str, Any],
    secret: str,
) -> str:
    """Assinatura esperada para o payload do evento.

    Raises:
        MissingSignedFieldError: Se algum campo assinado estiver ausente
    """
    return compute_signature(signature_string(tag, payload), secret)


def signatures_match(expected: str, claimed: str) -> bool:
    """Comparação byte a byte em tempo constante."""
    return hmac.compare_digest(expected.encode("utf-8"), claimed.encode("utf-8"))
