"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json

import pytest

from api.routes.health import router as health
from config.settings import ZadarmaSettings


@pytest.mark.asyncio
async def test_health_check_reports_service_name() -> None:
    response = await health.health_check()

    assert response.status == "healthy"
    assert response.service


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_without_credentials(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(health, "get_zadarma_settings", lambda: ZadarmaSettings())

    response = await health.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["zadarma"]["status"] == "failed"
    assert len(payload["checks"]["zadarma"]["errors"]) == 2


@pytest.mark.asyncio
async def test_readiness_returns_ready_with_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = ZadarmaSettings(api_key="KEY123", api_secret="secret1")
    monkeypatch.setattr(health, "get_zadarma_settings", lambda: settings)

    response = await health.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["zadarma"] == {"status": "ok", "errors": []}
