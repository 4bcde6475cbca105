"""Erros do conector Zadarma.

Taxonomia (todas levantadas de forma síncrona para o chamador imediato):
- ConfigurationError: verbo inválido, credenciais malformadas, parâmetros
  inválidos. Falha antes de qualquer IO.
- TransportError: falha de rede/conexão ou resposta ilegível.
- HttpStatusError: rejeição em nível HTTP (status >= 400).
- ApiRejectedError: HTTP OK, mas payload com status de erro.

Assinatura inválida de webhook NUNCA levanta exceção (ver webhook/receive.py).
"""

from __future__ import annotations

from utils.errors import InfrastructureError

GENERIC_ERROR_MESSAGE = "Unknown error"


class ZadarmaError(Exception):
    """Erro base do conector, sem dados sensíveis."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigurationError(ZadarmaError, ValueError):
    """Configuração inválida detectada antes de qualquer chamada de rede."""


class InvalidParameterError(ConfigurationError):
    """Parâmetro de endpoint inválido (ex: número sem dígitos)."""


class TransportError(ZadarmaError, InfrastructureError):
    """Não foi possível obter uma resposta utilizável do serviço."""


class HttpStatusError(ZadarmaError):
    """Serviço rejeitou a chamada com status HTTP >= 400."""


class ApiRejectedError(ZadarmaError):
    """Serviço respondeu com sucesso HTTP mas sinalizou erro no payload."""
