"""Cliente HTTP especializado para a API Zadarma.

Estende HttpClient genérico com o contrato de transporte da Zadarma:
- Header ``Authorization: {api_key}:{signature}`` (signer.py)
- Parâmetros canônicos na URL (GET) ou no corpo form-urlencoded (demais)
- Telemetria ``X-RateLimit-*`` por chamada
- Classificação de falhas: transporte, HTTP >= 400, erro de aplicação

Concorrência: credenciais são somente leitura. ``last_rate_limits`` e
``last_status_code`` são sobrescritos a cada chamada concluída (último a
escrever vence); quem precisa do valor exato usa o ApiResponse da chamada.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .api_errors import extract_message, parse_api_error
from .api_logging import log_api_failure, log_success
from .canonical import build_query
from .errors import ApiRejectedError, ConfigurationError, HttpStatusError, TransportError
from .http_base import HttpClient, HttpClientConfig
from .rate_limits import RateLimitSnapshot, parse_rate_limits
from .signer import Credentials, RequestSigner

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

logger: logging.Logger = logging.getLogger(__name__)

PROD_URL = "https://api.zadarma.com"
SANDBOX_URL = "https://api-sandbox.zadarma.com"

VALID_VERBS = frozenset({"GET", "POST", "PUT", "DELETE"})
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class ApiResponse:
    """Resultado de uma chamada bem-sucedida.

    Attributes:
        data: Payload decodificado (dict para json, str para xml)
        status_code: Status HTTP
        rate_limits: Snapshot de rate limit desta chamada
    """

    data: Any
    status_code: int
    rate_limits: RateLimitSnapshot = field(default_factory=dict)


def normalize_verb(verb: str) -> str:
    """Normaliza verbo para maiúsculas.

    Raises:
        ConfigurationError: Se verbo não suportado
    """
    normalized = (verb or "").upper()
    if normalized not in VALID_VERBS:
        raise ConfigurationError(f"Invalid request type specified: {verb!r}")
    return normalized


class ZadarmaHttpClient(HttpClient):
    """Transporte assinado para a API Zadarma."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        sandbox: bool = False,
        config: HttpClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Inicializa transporte.

        Args:
            credentials: Credenciais (validadas aqui, falha rápido)
            sandbox: Usa origem sandbox em vez de produção
            config: Configuração HTTP base
            http_client: Cliente httpx injetado (testes/lifecycle externo)

        Raises:
            ConfigurationError: Se credenciais malformadas
        """
        super().__init__(config, http_client)
        self._signer = RequestSigner(credentials)
        self.base_url = SANDBOX_URL if sandbox else PROD_URL
        self.last_status_code: int = 0
        self.last_rate_limits: RateLimitSnapshot = {}

    async def call(
        self,
        path: str,
        params: Mapping[str, object] | None = None,
        verb: str = "get",
        format: str = "json",
    ) -> ApiResponse:
        """Executa chamada assinada e classifica o resultado.

        Args:
            path: Path da API com versão (ex: /v1/info/balance/)
            params: Parâmetros da chamada (não é mutado)
            verb: get|post|put|delete (case-insensitive)
            format: json|xml, participa da assinatura

        Returns:
            ApiResponse com payload, status e rate limits

        Raises:
            ConfigurationError: Verbo inválido
            TransportError: Falha de rede, header de rate limit ou JSON inválidos
            HttpStatusError: Status HTTP >= 400
            ApiRejectedError: Payload com status de erro
        """
        method = normalize_verb(verb)
        call_params: dict[str, object] = {**(params or {}), "format": format}

        headers = self._signer.authorization_header(path, call_params)
        query = build_query(call_params)
        url = f"{self.base_url}{path}"
        content: bytes | None = None
        if method == "GET":
            url = f"{url}?{query}"
        else:
            content = query.encode("utf-8")
            headers["Content-Type"] = FORM_CONTENT_TYPE

        response = await self.send(method, url, content=content, headers=headers)
        return self._process_response(response, method, path, format)

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        path: str,
        format: str,
    ) -> ApiResponse:
        """Registra status/rate limits e classifica a resposta."""
        self.last_status_code = response.status_code
        rate_limits = parse_rate_limits(response.headers.multi_items())
        self.last_rate_limits = rate_limits

        data = self._decode_body(response, method, path, format)

        if response.status_code >= 400:
            log_api_failure("http_status", method, path, response.status_code)
            raise HttpStatusError(extract_message(data), status_code=response.status_code)

        api_error = parse_api_error(data, response.status_code)
        if api_error:
            log_api_failure("application", method, path, response.status_code)
            raise ApiRejectedError(api_error.message, status_code=api_error.status_code)

        log_success(method, path, response.status_code, rate_limits)
        return ApiResponse(
            data=data,
            status_code=response.status_code,
            rate_limits=rate_limits,
        )

    def _decode_body(
        self,
        response: httpx.Response,
        method: str,
        path: str,
        format: str,
    ) -> Any:
        """Decodifica o corpo; JSON ilegível em sucesso falha fechado."""
        if format != "json":
            return response.text
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if response.status_code >= 400:
                return None
            log_api_failure("invalid_json", method, path, response.status_code)
            raise TransportError(
                "Response JSON inválido",
                status_code=response.status_code,
            ) from e
