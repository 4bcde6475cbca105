"""Erros de aplicação retornados no payload da API Zadarma."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import GENERIC_ERROR_MESSAGE

ERROR_STATUS = "error"


@dataclass(frozen=True)
class ZadarmaApiError:
    """Erro sinalizado pelo payload (``status == "error"``)."""

    message: str
    status_code: int


def extract_message(response_data: Any) -> str:
    """Retorna a mensagem do servidor ou uma mensagem genérica."""
    if isinstance(response_data, dict):
        message = response_data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return GENERIC_ERROR_MESSAGE


def parse_api_error(response_data: Any, status_code: int = 200) -> ZadarmaApiError | None:
    """Extrai erro de aplicação do response JSON.

    Args:
        response_data: Payload decodificado
        status_code: Status HTTP observado

    Returns:
        ZadarmaApiError se o payload sinaliza erro, None se sucesso
    """
    if not isinstance(response_data, dict):
        return None
    if response_data.get("status") != ERROR_STATUS:
        return None
    return ZadarmaApiError(
        message=extract_message(response_data),
        status_code=status_code,
    )
