"""Testes da união de eventos e da tabela de campos assinados."""

from __future__ import annotations

import pytest

from api.connectors.zadarma.webhook.events import (
    EVENT_TYPES,
    SIGNED_FIELDS,
    MissingSignedFieldError,
    NotifyEnd,
    NotifyEvent,
    NotifyIvr,
    NotifyRecord,
    build_event,
    parse_event_tag,
    signature_string,
)


def test_every_event_has_signed_fields_and_type() -> None:
    assert set(SIGNED_FIELDS) == set(NotifyEvent)
    assert set(EVENT_TYPES) == set(NotifyEvent)


@pytest.mark.parametrize("tag", list(NotifyEvent))
def test_event_types_declare_signed_fields(tag: NotifyEvent) -> None:
    declared = EVENT_TYPES[tag].__dataclass_fields__
    for name in SIGNED_FIELDS[tag]:
        assert name in declared


def test_signed_field_table() -> None:
    assert SIGNED_FIELDS[NotifyEvent.ANSWER] == ("caller_id", "destination", "call_start")
    assert SIGNED_FIELDS[NotifyEvent.OUT_END] == ("internal", "destination", "call_start")
    assert SIGNED_FIELDS[NotifyEvent.RECORD] == ("pbx_call_id", "call_id_with_rec")


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"event": "NOTIFY_END"}, NotifyEvent.END),
        ({"event": "NOTIFY_SOMETHING"}, None),
        ({"event": 42}, None),
        ({}, None),
    ],
)
def test_parse_event_tag(payload: dict[str, object], expected: NotifyEvent | None) -> None:
    assert parse_event_tag(payload) is expected


def test_signature_string_concatenates_in_order() -> None:
    payload = {
        "event": "NOTIFY_OUT_START",
        "call_start": "2023-01-01 10:00:00",
        "destination": "79990000000",
        "internal": "100",
    }
    assert signature_string(NotifyEvent.OUT_START, payload) == "100799900000002023-01-01 10:00:00"


def test_signature_string_missing_field() -> None:
    with pytest.raises(MissingSignedFieldError, match="call_id_with_rec"):
        signature_string(NotifyEvent.RECORD, {"pbx_call_id": "in_1"})


def test_build_event_end() -> None:
    payload = {
        "event": "NOTIFY_END",
        "call_start": "2023-01-01 10:00:00",
        "pbx_call_id": "in_1",
        "caller_id": "79990000000",
        "called_did": "74950000000",
        "duration": 35,
        "disposition": "answered",
        "is_recorded": "1",
        "extra_field": "kept in raw",
    }

    event = build_event(NotifyEvent.END, payload)

    assert isinstance(event, NotifyEnd)
    assert event.event is NotifyEvent.END
    assert event.duration == "35"
    assert event.internal == ""
    assert event.raw["extra_field"] == "kept in raw"


def test_build_event_record() -> None:
    event = build_event(
        NotifyEvent.RECORD,
        {"event": "NOTIFY_RECORD", "pbx_call_id": "in_1", "call_id_with_rec": "rec_1"},
    )
    assert event == NotifyRecord(pbx_call_id="in_1", call_id_with_rec="rec_1")


def test_build_event_ivr_keeps_wait_dtmf_mapping() -> None:
    payload = {
        "event": "NOTIFY_IVR",
        "call_start": "2023-01-01 10:00:00",
        "caller_id": "1",
        "called_did": "2",
        "wait_dtmf": {"name": "menu", "digits": "1", "default_behaviour": "no"},
    }

    event = build_event(NotifyEvent.IVR, payload)

    assert isinstance(event, NotifyIvr)
    assert event.wait_dtmf == {"name": "menu", "digits": "1", "default_behaviour": "no"}
