"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json

import pytest

import api.routes.health.router as health_router
from ai.core import MockFlowGenerator
from api.routes.health.router import health_check, readiness_check
from app.sessions import KioskSessionManager, LoggingEnqueueSink
from navigation import EffectSimulator


class _ConfiguredGenerator:
    async def generate(self, *, system_prompt: str, user_prompt: str) -> None:
        return None


def _manager(max_sessions: int = 5) -> KioskSessionManager:
    return KioskSessionManager(
        simulator=EffectSimulator(latency_seconds=0.01),
        enqueue_sink=LoggingEnqueueSink(),
        max_sessions=max_sessions,
    )


@pytest.mark.asyncio
async def test_health_reports_service_name() -> None:
    response = await health_check()

    assert response.status == "healthy"
    assert response.service == "kiosk-sdui"


@pytest.mark.asyncio
async def test_readiness_is_ready_with_mock_generator_degraded(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(health_router, "get_flow_generator", lambda: MockFlowGenerator())

    response = await readiness_check(_manager())
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["default_flow"]["status"] == "ok"
    assert payload["checks"]["default_flow"]["detail"] == "default-clinic-flow"
    assert payload["checks"]["prompt_assets"]["status"] == "ok"
    assert payload["checks"]["sessions"]["detail"] == "active=0"
    assert payload["checks"]["flow_generator"]["status"] == "degraded"
    assert payload["checks"]["flow_generator"]["error"] == "not_configured"


@pytest.mark.asyncio
async def test_readiness_reports_configured_generator_ok(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(health_router, "get_flow_generator", _ConfiguredGenerator)

    response = await readiness_check(_manager())
    payload = json.loads(response.body.decode("utf-8"))

    assert payload["checks"]["flow_generator"]["status"] == "ok"
    assert payload["checks"]["flow_generator"]["detail"] == "_ConfiguredGenerator"


@pytest.mark.asyncio
async def test_readiness_stays_ready_when_sessions_at_capacity(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(health_router, "get_flow_generator", lambda: MockFlowGenerator())
    manager = _manager(max_sessions=1)
    manager.create()

    response = await readiness_check(manager)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["checks"]["sessions"]["status"] == "degraded"
    assert payload["checks"]["sessions"]["error"] == "at_capacity"


@pytest.mark.asyncio
async def test_readiness_not_ready_when_default_flow_fails(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _broken_default() -> None:
        raise OSError("asset ausente")

    monkeypatch.setattr(health_router, "load_default_flow", _broken_default)
    monkeypatch.setattr(health_router, "get_flow_generator", lambda: MockFlowGenerator())

    response = await readiness_check(_manager())
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["default_flow"] == {
        "status": "failed",
        "detail": None,
        "error": "OSError",
    }
