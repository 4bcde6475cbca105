"""Testes do composition root (app.bootstrap)."""

from __future__ import annotations

import pytest

from api.connectors.zadarma import PROD_URL, SANDBOX_URL, ConfigurationError, ZadarmaApi
from app import bootstrap
from config.settings import BaseSettings, ZadarmaSettings


def _patch_settings(
    monkeypatch: pytest.MonkeyPatch,
    zadarma: ZadarmaSettings,
    base: BaseSettings | None = None,
) -> None:
    monkeypatch.setattr(bootstrap, "get_zadarma_settings", lambda: zadarma)
    monkeypatch.setattr(bootstrap, "get_base_settings", lambda: base or BaseSettings())


def test_create_zadarma_api(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, ZadarmaSettings(api_key="KEY123", api_secret="secret1"))

    api = bootstrap.create_zadarma_api()

    assert isinstance(api, ZadarmaApi)
    assert api.client.base_url == PROD_URL


def test_create_zadarma_api_sandbox(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = ZadarmaSettings(api_key="KEY123", api_secret="secret1", sandbox=True)
    _patch_settings(monkeypatch, settings)

    assert bootstrap.create_zadarma_api().client.base_url == SANDBOX_URL


def test_create_zadarma_api_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, ZadarmaSettings())

    with pytest.raises(ConfigurationError):
        bootstrap.create_zadarma_api()


def test_validate_runtime_settings_strict_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, ZadarmaSettings(), BaseSettings(environment="production"))

    with pytest.raises(RuntimeError, match="Configuração inválida para production"):
        bootstrap.validate_runtime_settings()


def test_validate_runtime_settings_lenient_in_development(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _patch_settings(monkeypatch, ZadarmaSettings(), BaseSettings(environment="development"))

    bootstrap.validate_runtime_settings()
