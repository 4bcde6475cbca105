"""Assinatura de requisições para a API Zadarma.

Algoritmo (ordem importa, reproduzido bit a bit):
1. Filtra parâmetros assináveis e ordena por chave
2. ``params_string`` = query canônica (canonical.py)
3. ``md5_hex`` = MD5(params_string) em hex minúsculo
4. ``base`` = method + params_string + md5_hex (sem separadores)
5. ``hmac_hex`` = HMAC-SHA1(secret, base) em hex minúsculo
6. ``signature`` = base64 do TEXTO hex (não dos bytes crus)

O serviço rejeita silenciosamente (4xx genérico) o base64 dos bytes crus.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Mapping
from dataclasses import dataclass, field

from .canonical import build_signing_query
from .errors import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """Par api_key/secret do cliente. O secret nunca aparece em repr/logs."""

    api_key: str
    secret: str = field(repr=False)

    def validate(self) -> None:
        """Falha rápido para credenciais malformadas.

        Raises:
            ConfigurationError: Se key/secret vazios ou key contém ``:``
        """
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError("api_key é obrigatório")
        if ":" in self.api_key:
            raise ConfigurationError("api_key não pode conter ':'")
        if not self.secret or not self.secret.strip():
            raise ConfigurationError("secret é obrigatório")


def _hmac_sha1(secret: str, message: str) -> hmac.HMAC:
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha1)


def build_signature_base(method: str, params: Mapping[str, object]) -> str:
    """Monta a base de assinatura: method + params canônicos + MD5 hex."""
    params_string = build_signing_query(params)
    md5_hex = hashlib.md5(params_string.encode("utf-8")).hexdigest()
    return f"{method}{params_string}{md5_hex}"


def encode_signature(signature_base: str, secret: str) -> str:
    """Base64 da representação hex do HMAC-SHA1."""
    hmac_hex = _hmac_sha1(secret, signature_base).hexdigest()
    return base64.b64encode(hmac_hex.encode("ascii")).decode("ascii")


def sign_request(method: str, params: Mapping[str, object], key: str, secret: str) -> str:
    """Gera o valor do header Authorization (``{key}:{signature}``).

    Args:
        method: Path da API incluindo versão (ex: /v1/info/balance/)
        params: Parâmetros da chamada (inclusive ``format``)
        key: API key do usuário
        secret: Secret do usuário

    Returns:
        Valor do header Authorization
    """
    signature = encode_signature(build_signature_base(method, params), secret)
    return f"{key}:{signature}"


class RequestSigner:
    """Assina requisições com as credenciais de um cliente."""

    def __init__(self, credentials: Credentials) -> None:
        credentials.validate()
        self._credentials = credentials

    @property
    def api_key(self) -> str:
        return self._credentials.api_key

    def authorization_header(
        self,
        method: str,
        params: Mapping[str, object],
    ) -> dict[str, str]:
        """Retorna o header Authorization para a chamada."""
        value = sign_request(
            method,
            params,
            self._credentials.api_key,
            self._credentials.secret,
        )
        return {"Authorization": value}
