"""Webhook Zadarma: validação de URL, assinatura e eventos tipados."""

from .events import (
    EVENT_TYPES,
    SIGNED_FIELDS,
    MissingSignedFieldError,
    NotifyAnswer,
    NotifyEnd,
    NotifyEvent,
    NotifyInternal,
    NotifyIvr,
    NotifyOutEnd,
    NotifyOutStart,
    NotifyRecord,
    NotifyStart,
    WebhookEvent,
    build_event,
    parse_event_tag,
    signature_string,
)
from .receive import VerificationOutcome, WebhookVerification, verify_webhook_event
from .signature import (
    SIGNATURE_HEADER,
    compute_signature,
    compute_webhook_signature,
    signatures_match,
)
from .verify import WebhookEchoError, verify_webhook_echo

__all__ = [
    "EVENT_TYPES",
    "SIGNATURE_HEADER",
    "SIGNED_FIELDS",
    "MissingSignedFieldError",
    "NotifyAnswer",
    "NotifyEnd",
    "NotifyEvent",
    "NotifyInternal",
    "NotifyIvr",
    "NotifyOutEnd",
    "NotifyOutStart",
    "NotifyRecord",
    "NotifyStart",
    "VerificationOutcome",
    "WebhookEchoError",
    "WebhookEvent",
    "WebhookVerification",
    "build_event",
    "compute_signature",
    "compute_webhook_signature",
    "parse_event_tag",
    "signature_string",
    "signatures_match",
    "verify_webhook_echo",
    "verify_webhook_event",
]
