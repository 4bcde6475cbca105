"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
monta o cliente Zadarma a partir do ambiente.

Uso:
    from app.bootstrap import initialize_app, create_zadarma_api

    initialize_app()
    api = create_zadarma_api()
"""

from __future__ import annotations

import logging

from api.connectors.zadarma import (
    Credentials,
    HttpClientConfig,
    ZadarmaApi,
    ZadarmaHttpClient,
)
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_zadarma_settings

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        RuntimeError: Configuração inválida em ambiente estrito
    """
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"zadarma: {error}" for error in get_zadarma_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


def create_zadarma_api() -> ZadarmaApi:
    """Factory do cliente Zadarma com config do ambiente.

    Raises:
        ConfigurationError: Se credenciais ausentes ou malformadas
    """
    settings = get_zadarma_settings()
    client = ZadarmaHttpClient(
        Credentials(api_key=settings.api_key, secret=settings.api_secret),
        sandbox=settings.sandbox,
        config=HttpClientConfig(timeout_seconds=settings.request_timeout_seconds),
    )
    return ZadarmaApi(client)
