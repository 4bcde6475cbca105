"""Validação da URL de webhook exigida pela Zadarma (``zd_echo``)."""

from __future__ import annotations


class WebhookEchoError(ValueError):
    """Requisição de validação sem ``zd_echo``."""


def verify_webhook_echo(zd_echo: str | None) -> str:
    """Retorna o conteúdo a ser respondido na validação da URL.

    Args:
        zd_echo: Valor do query param ``zd_echo``

    Raises:
        WebhookEchoError: Se o parâmetro estiver ausente ou vazio

    Returns:
        O próprio ``zd_echo``
    """
    if not zd_echo:
        raise WebhookEchoError("missing_zd_echo")
    return zd_echo
