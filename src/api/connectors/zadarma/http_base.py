"""Cliente HTTP base para conectores da camada API.

Sem retry, backoff ou pooling: cada falha é reportada uma única vez ao
chamador, que decide a política de retentativa.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)


class HttpClient:
    """Cliente HTTP simples para chamadas externas."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._http_client = http_client

    async def send(
        self,
        method: str,
        url: str,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa a requisição e converte falhas de rede em TransportError.

        Raises:
            TransportError: Falha de conexão, timeout ou protocolo HTTP
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            if self._http_client is not None:
                return await self._http_client.request(
                    method,
                    url,
                    content=content,
                    headers=merged_headers,
                    timeout=self._config.timeout_seconds,
                )
            async with httpx.AsyncClient() as client:
                return await client.request(
                    method,
                    url,
                    content=content,
                    headers=merged_headers,
                    timeout=self._config.timeout_seconds,
                )
        except httpx.HTTPError as exc:
            logger.warning(
                "http_transport_error",
                extra={"method": method, "error_type": type(exc).__name__},
            )
            raise TransportError(str(exc) or type(exc).__name__) from exc
