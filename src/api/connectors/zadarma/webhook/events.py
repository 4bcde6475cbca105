"""Eventos de webhook da Zadarma (união fechada de 8 variantes).

Cada variante é um dataclass imutável; ``SIGNED_FIELDS`` define, por tag,
os campos concatenados (sem separador, nesta ordem) na assinatura.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any


class NotifyEvent(StrEnum):
    """Tags reconhecidas no campo ``event``."""

    START = "NOTIFY_START"
    INTERNAL = "NOTIFY_INTERNAL"
    ANSWER = "NOTIFY_ANSWER"
    END = "NOTIFY_END"
    OUT_START = "NOTIFY_OUT_START"
    OUT_END = "NOTIFY_OUT_END"
    RECORD = "NOTIFY_RECORD"
    IVR = "NOTIFY_IVR"


SIGNED_FIELDS: dict[NotifyEvent, tuple[str, ...]] = {
    NotifyEvent.START: ("caller_id", "called_did", "call_start"),
    NotifyEvent.INTERNAL: ("caller_id", "called_did", "call_start"),
    NotifyEvent.ANSWER: ("caller_id", "destination", "call_start"),
    NotifyEvent.END: ("caller_id", "called_did", "call_start"),
    NotifyEvent.OUT_START: ("internal", "destination", "call_start"),
    NotifyEvent.OUT_END: ("internal", "destination", "call_start"),
    NotifyEvent.RECORD: ("pbx_call_id", "call_id_with_rec"),
    NotifyEvent.IVR: ("caller_id", "called_did", "call_start"),
}


@dataclass(frozen=True)
class NotifyStart:
    """Início de chamada recebida."""

    call_start: str
    caller_id: str
    called_did: str
    pbx_call_id: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.START, init=False)


@dataclass(frozen=True)
class NotifyInternal:
    """Chamada recebida transferida para ramal."""

    call_start: str
    caller_id: str
    called_did: str
    pbx_call_id: str = ""
    internal: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.INTERNAL, init=False)


@dataclass(frozen=True)
class NotifyAnswer:
    """Chamada atendida."""

    call_start: str
    caller_id: str
    destination: str
    pbx_call_id: str = ""
    internal: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.ANSWER, init=False)


@dataclass(frozen=True)
class NotifyEnd:
    """Fim de chamada recebida."""

    call_start: str
    caller_id: str
    called_did: str
    pbx_call_id: str = ""
    internal: str = ""
    duration: str = ""
    disposition: str = ""
    status_code: str = ""
    is_recorded: str = ""
    call_id_with_rec: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.END, init=False)


@dataclass(frozen=True)
class NotifyOutStart:
    """Início de chamada originada no PBX."""

    call_start: str
    internal: str
    destination: str
    pbx_call_id: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.OUT_START, init=False)


@dataclass(frozen=True)
class NotifyOutEnd:
    """Fim de chamada originada no PBX."""

    call_start: str
    internal: str
    destination: str
    pbx_call_id: str = ""
    caller_id: str = ""
    duration: str = ""
    disposition: str = ""
    status_code: str = ""
    is_recorded: str = ""
    call_id_with_rec: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.OUT_END, init=False)


@dataclass(frozen=True)
class NotifyRecord:
    """Gravação de chamada disponível."""

    pbx_call_id: str
    call_id_with_rec: str
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.RECORD, init=False)


@dataclass(frozen=True)
class NotifyIvr:
    """Resultado de menu de voz (IVR)."""

    call_start: str
    caller_id: str
    called_did: str
    pbx_call_id: str = ""
    ivr_saydigits: str = ""
    ivr_saynumber: str = ""
    wait_dtmf: Mapping[str, Any] | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    event: NotifyEvent = field(default=NotifyEvent.IVR, init=False)


WebhookEvent = (
    NotifyStart
    | NotifyInternal
    | NotifyAnswer
    | NotifyEnd
    | NotifyOutStart
    | NotifyOutEnd
    | NotifyRecord
    | NotifyIvr
)

EVENT_TYPES: dict[NotifyEvent, type[WebhookEvent]] = {
    NotifyEvent.START: NotifyStart,
    NotifyEvent.INTERNAL: NotifyInternal,
    NotifyEvent.ANSWER: NotifyAnswer,
    NotifyEvent.END: NotifyEnd,
    NotifyEvent.OUT_START: NotifyOutStart,
    NotifyEvent.OUT_END: NotifyOutEnd,
    NotifyEvent.RECORD: NotifyRecord,
    NotifyEvent.IVR: NotifyIvr,
}


class MissingSignedFieldError(ValueError):
    """Payload sem um dos campos assinados do evento."""


def parse_event_tag(payload: Mapping[str, Any]) -> NotifyEvent | None:
    """Retorna a tag reconhecida ou None."""
    value = payload.get("event")
    if not isinstance(value, str):
        return None
    try:
        return NotifyEvent(value)
    except ValueError:
        return None


def signature_string(tag: NotifyEvent, payload: Mapping[str, Any]) -> str:
    """Concatena os campos assinados do evento (sem separadores).

    Raises:
        MissingSignedFieldError: Se algum campo assinado estiver ausente
    """
    parts: list[str] = []
    for name in SIGNED_FIELDS[tag]:
        value = payload.get(name)
        if value is None:
            raise MissingSignedFieldError(name)
        parts.append(str(value))
    return "".join(parts)


def _coerce(value: Any) -> Any:
    if value is None or isinstance(value, (str, Mapping)):
        return value
    return str(value)


def build_event(tag: NotifyEvent, payload: Mapping[str, Any]) -> WebhookEvent:
    """Constrói a variante tipada a partir do payload.

    Campos desconhecidos ficam apenas em ``raw``.

    Raises:
        MissingSignedFieldError: Se algum campo assinado estiver ausente
    """
    event_type = EVENT_TYPES[tag]
    for name in SIGNED_FIELDS[tag]:
        if payload.get(name) is None:
            raise MissingSignedFieldError(name)
    kwargs: dict[str, Any] = {}
    for item in fields(event_type):
        if not item.init or item.name == "raw":
            continue
        if item.name in payload and payload[item.name] is not None:
            kwargs[item.name] = _coerce(payload[item.name])
    return event_type(raw=dict(payload), **kwargs)
