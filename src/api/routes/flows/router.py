"""Endpoints do editor de fluxos: fluxo padrão, validação e geração por IA."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ai.services import FlowGenerationService
from app.bootstrap import get_flow_generation_service
from flowdoc import DocumentInvalidError, describe_flow, flow_to_dict, load_default_flow, parse_flow

logger = logging.getLogger(__name__)

router = APIRouter()


class GenerateFlowRequest(BaseModel):
    """Descrição do quiosque em linguagem natural."""

    prompt: str = Field(default="", max_length=4000)


@router.get("/default")
async def get_default_flow() -> dict[str, Any]:
    """Documento conhecido-válido usado como ponto de partida do editor."""
    return flow_to_dict(load_default_flow())


@router.post("/validate")
async def validate_flow(request: Request) -> JSONResponse:
    """Valida o texto do editor (corpo bruto, JSON).

    Retorna estatísticas do fluxo ou a mensagem de erro para exibição inline.
    """
    raw = await request.body()
    try:
        flow = parse_flow(raw)
    except DocumentInvalidError as exc:
        logger.info("flow_validation_failed", extra={"body_size": len(raw)})
        return JSONResponse(
            status_code=422,
            content={"valid": False, "error": exc.message},
        )

    summary = describe_flow(flow)
    return JSONResponse(content={"valid": True, **summary})


@router.post("/generate")
async def generate_flow(
    payload: GenerateFlowRequest,
    service: FlowGenerationService = Depends(get_flow_generation_service),
) -> dict[str, Any]:
    """Gera fluxo por IA; falhas caem no fluxo padrão (fallback_used=True)."""
    result = await service.generate(payload.prompt)
    return {
        "flow": flow_to_dict(result.flow),
        "fallback_used": result.fallback_used,
        "reason": result.reason,
    }
