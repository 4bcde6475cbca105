"""Endpoints de webhook da Zadarma.

Endpoints:
- GET /webhook/zadarma: validação da URL (responde ``zd_echo``)
- POST /webhook/zadarma: recebimento de eventos NOTIFY_*

Fluxo:
1. GET: Zadarma envia ``zd_echo``, respondemos com o mesmo valor
2. POST: Zadarma envia o evento (form-urlencoded) com header ``Signature``;
   validamos a assinatura e despachamos para os handlers registrados

Segurança:
- Assinatura obrigatória por padrão (ZADARMA_WEBHOOK_REQUIRE_SIGNATURE)
- Eventos fora da allow-list são ignorados com 200 (sem retry do provedor)
- Resposta rápida; handlers rodam em background
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import parse_qsl

from fastapi import APIRouter, Request, Response, status

from api.connectors.zadarma.webhook import (
    SIGNATURE_HEADER,
    NotifyEvent,
    VerificationOutcome,
    WebhookEchoError,
    WebhookEvent,
    verify_webhook_echo,
    verify_webhook_event,
)
from app.observability import (
    CORRELATION_HEADER,
    get_correlation_id,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from config.settings import get_zadarma_settings

logger = logging.getLogger(__name__)

router = APIRouter()

EventHandler = Callable[[WebhookEvent], Awaitable[None]]

_handlers: dict[NotifyEvent, list[EventHandler]] = {}
_background_tasks: set[asyncio.Task] = set()


def register_event_handler(tag: NotifyEvent, handler: EventHandler) -> None:
    """Registra handler assíncrono para um tipo de evento."""
    _handlers.setdefault(tag, []).append(handler)


def clear_event_handlers() -> None:
    _handlers.clear()


async def _dispatch_safe(event: WebhookEvent, correlation_id: str) -> None:
    """Executa handlers em background sem propagar exceções."""
    token = set_correlation_id(correlation_id)
    try:
        for handler in _handlers.get(event.event, []):
            try:
                await handler(event)
            except Exception:
                logger.exception(
                    "webhook_handler_failed",
                    extra={"event": str(event.event)},
                )
    finally:
        reset_correlation_id(token)


def _schedule_dispatch(event: WebhookEvent) -> None:
    if not _handlers.get(event.event):
        return
    task = asyncio.create_task(_dispatch_safe(event, get_correlation_id()))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)


def _parse_body(raw_body: bytes, content_type: str) -> dict[str, Any]:
    """Decodifica corpo form-urlencoded (padrão) ou JSON."""
    if "json" in content_type:
        try:
            payload = json.loads(raw_body or b"{}")
        except json.JSONDecodeError:
            return {}
        return payload if isinstance(payload, dict) else {}
    text = raw_body.decode("utf-8", errors="replace")
    return dict(parse_qsl(text, keep_blank_values=True))


@router.get("/")
async def verify_webhook(request: Request) -> Response:
    """Validação da URL de webhook — responde ``zd_echo`` como texto."""
    try:
        echo = verify_webhook_echo(request.query_params.get("zd_echo"))
    except WebhookEchoError as exc:
        logger.warning(
            "webhook_echo_failed",
            extra={"channel": "zadarma", "error": str(exc)},
        )
        return Response(
            content="Bad Request",
            media_type="text/plain",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    logger.info("webhook_echo_verified", extra={"channel": "zadarma"})
    return Response(content=echo, media_type="text/plain", status_code=status.HTTP_200_OK)


@router.post("/", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de eventos NOTIFY_* da Zadarma.

    Returns:
        ``{"status": "received"|"ignored"}`` ou Response de erro (400/401).
    """
    raw_body = await request.body()
    payload = _parse_body(raw_body, request.headers.get("content-type", ""))
    token = set_correlation_id(
        resolve_correlation_id(
            request.headers.get(CORRELATION_HEADER), payload.get("pbx_call_id")
        )
    )
    try:
        settings = get_zadarma_settings()
        signature = request.headers.get(SIGNATURE_HEADER)

        if settings.webhook_require_signature and not signature:
            logger.warning(
                "webhook_signature_missing",
                extra={"channel": "zadarma", "correlation_id": get_correlation_id()},
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        result = verify_webhook_event(
            payload,
            settings.api_secret,
            signature=signature,
            event_filter=settings.event_filter,
        )

        if not result.is_applicable:
            logger.info(
                "webhook_ignored",
                extra={"channel": "zadarma", "outcome": str(result.outcome)},
            )
            return {"status": "ignored", "correlation_id": get_correlation_id()}

        if result.outcome is VerificationOutcome.SIGNATURE_MISMATCH:
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        if result.event is None:
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "zadarma",
                "event": str(result.event.event),
                "signature_verified": result.is_authentic,
                "payload_size": len(raw_body),
            },
        )
        _schedule_dispatch(result.event)
        return {
            "status": "received",
            "event": str(result.event.event),
            "correlation_id": get_correlation_id(),
        }
    finally:
        reset_correlation_id(token)
