"""Conector Zadarma - adapter de borda para a API de telefonia.

Este módulo é o único ponto de IO para a Zadarma.
Responsabilidades:
- Codificação canônica de parâmetros
- Assinatura de requisições (Authorization)
- Transporte HTTP com classificação de falhas e rate limits
- Wrappers dos endpoints REST v1
- Webhook (validação de URL, assinatura, eventos tipados)
"""

from .canonical import build_query, build_signing_query, signable_params
from .endpoints import ZadarmaApi
from .errors import (
    ApiRejectedError,
    ConfigurationError,
    HttpStatusError,
    InvalidParameterError,
    TransportError,
    ZadarmaError,
)
from .http_base import HttpClientConfig
from .http_client import PROD_URL, SANDBOX_URL, ApiResponse, ZadarmaHttpClient
from .rate_limits import RateLimitSnapshot, parse_rate_limits
from .signer import Credentials, RequestSigner, sign_request

__all__ = [
    "PROD_URL",
    "SANDBOX_URL",
    "ApiRejectedError",
    "ApiResponse",
    "ConfigurationError",
    "Credentials",
    "HttpClientConfig",
    "HttpStatusError",
    "InvalidParameterError",
    "RateLimitSnapshot",
    "RequestSigner",
    "TransportError",
    "ZadarmaApi",
    "ZadarmaError",
    "ZadarmaHttpClient",
    "build_query",
    "build_signing_query",
    "parse_rate_limits",
    "sign_request",
    "signable_params",
]
