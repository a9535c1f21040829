"""Endpoints de health check (liveness/readiness)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ai.config import PromptAssetError, load_prompt_asset
from ai.core import MockFlowGenerator
from ai.prompts import FLOW_GENERATOR_PROMPT_FILE
from app.bootstrap import get_flow_generator, get_session_manager
from app.sessions import KioskSessionManager
from flowdoc import FlowDocumentError, load_default_flow

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    detail: str | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "detail": self.detail,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service="kiosk-sdui",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(
    manager: KioskSessionManager = Depends(get_session_manager),
) -> JSONResponse:
    """Readiness probe: assets versionados carregam e há capacidade de sessões."""
    flow_check = _check_default_flow()
    prompt_check = _check_prompt_assets()
    sessions_check = _check_sessions(manager)
    generator_check = _check_generator()

    ready = flow_check.status == "ok" and sessions_check.status != "failed"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "default_flow": flow_check.as_dict(),
            "prompt_assets": prompt_check.as_dict(),
            "sessions": sessions_check.as_dict(),
            "flow_generator": generator_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_default_flow() -> DependencyCheck:
    try:
        flow = load_default_flow()
    except (FlowDocumentError, OSError) as exc:
        logger.error("readiness_default_flow_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="failed", error=type(exc).__name__)
    return DependencyCheck(status="ok", detail=flow.flow_id)


def _check_prompt_assets() -> DependencyCheck:
    try:
        load_prompt_asset(FLOW_GENERATOR_PROMPT_FILE)
    except PromptAssetError as exc:
        return DependencyCheck(status="degraded", error=type(exc).__name__)
    return DependencyCheck(status="ok")


def _check_sessions(manager: KioskSessionManager) -> DependencyCheck:
    manager.purge_expired()
    detail = f"active={manager.active_count}"
    if manager.at_capacity:
        return DependencyCheck(status="degraded", detail=detail, error="at_capacity")
    return DependencyCheck(status="ok", detail=detail)


def _check_generator() -> DependencyCheck:
    generator = get_flow_generator()
    name = type(generator).__name__
    if isinstance(generator, MockFlowGenerator):
        return DependencyCheck(status="degraded", detail=name, error="not_configured")
    return DependencyCheck(status="ok", detail=name)
