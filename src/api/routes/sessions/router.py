"""Endpoints de sessões de quiosque (simulador / dispositivo).

Cada rota resolve a sessão, aplica um evento e devolve a projeção
renderizável atualizada. Eventos bloqueados (validação, efeito em voo,
estado degradado) não são erro HTTP: voltam com accepted=false e o motivo.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.bootstrap import get_session_manager
from app.observability import reset_kiosk_session_id, set_kiosk_session_id
from app.sessions import (
    KioskSession,
    KioskSessionManager,
    SessionLimitExceededError,
    SessionNotFoundError,
)
from flowdoc import DocumentInvalidError, Flow, parse_flow
from navigation import StepResult

logger = logging.getLogger(__name__)

router = APIRouter()


class InputValueRequest(BaseModel):
    """Novo valor de um campo de entrada."""

    value: str = ""


@contextmanager
def _bound_session(manager: KioskSessionManager, session_id: str) -> Iterator[KioskSession]:
    try:
        kiosk_session = manager.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    token = set_kiosk_session_id(session_id)
    try:
        yield kiosk_session
    finally:
        reset_kiosk_session_id(token)


def _view_payload(kiosk_session: KioskSession) -> dict[str, Any]:
    return {
        "session_id": kiosk_session.session_id,
        "view": kiosk_session.render().model_dump(mode="json"),
    }


def _step_payload(kiosk_session: KioskSession, result: StepResult) -> dict[str, Any]:
    return {
        **_view_payload(kiosk_session),
        "accepted": result.accepted,
        "rejected_reason": result.rejected_reason,
    }


async def _parse_optional_flow(request: Request) -> Flow | None:
    raw = await request.body()
    if not raw.strip():
        return None
    return parse_flow(raw)


@router.post("", status_code=201)
async def create_session(
    request: Request,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> JSONResponse:
    """Cria sessão com o fluxo do corpo (ou o fluxo padrão se vazio)."""
    try:
        flow = await _parse_optional_flow(request)
    except DocumentInvalidError as exc:
        return JSONResponse(status_code=422, content={"error": exc.message})

    try:
        kiosk_session = manager.create(flow)
    except SessionLimitExceededError as exc:
        return JSONResponse(status_code=503, content={"error": str(exc)})

    return JSONResponse(status_code=201, content=_view_payload(kiosk_session))


@router.get("/{session_id}")
async def get_session(
    session_id: str,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> dict[str, Any]:
    """Projeção atual da sessão."""
    with _bound_session(manager, session_id) as kiosk_session:
        return _view_payload(kiosk_session)


@router.put("/{session_id}/inputs/{component_id}")
async def set_input(
    session_id: str,
    component_id: str,
    payload: InputValueRequest,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> dict[str, Any]:
    """Atualiza o valor de um campo da tela atual."""
    with _bound_session(manager, session_id) as kiosk_session:
        result = kiosk_session.set_input(component_id, payload.value)
        return _step_payload(kiosk_session, result)


@router.post("/{session_id}/components/{component_id}/activate")
async def activate_component(
    session_id: str,
    component_id: str,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> dict[str, Any]:
    """Aciona um componente (botão) da tela atual."""
    with _bound_session(manager, session_id) as kiosk_session:
        result = kiosk_session.activate(component_id)
        return _step_payload(kiosk_session, result)


@router.post("/{session_id}/back")
async def go_back(
    session_id: str,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> dict[str, Any]:
    """Volta para a tela anterior."""
    with _bound_session(manager, session_id) as kiosk_session:
        result = kiosk_session.back()
        return _step_payload(kiosk_session, result)


@router.post("/{session_id}/restart")
async def restart(
    session_id: str,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> dict[str, Any]:
    """Reinicia a sessão na tela inicial (sempre aceito)."""
    with _bound_session(manager, session_id) as kiosk_session:
        result = kiosk_session.restart()
        return _step_payload(kiosk_session, result)


@router.put("/{session_id}/flow")
async def replace_flow(
    session_id: str,
    request: Request,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> JSONResponse:
    """Troca o documento da sessão (edição ao vivo).

    Documento inválido mantém o fluxo anterior ativo.
    """
    with _bound_session(manager, session_id) as kiosk_session:
        raw = await request.body()
        try:
            flow = parse_flow(raw)
        except DocumentInvalidError as exc:
            logger.info(
                "session_flow_rejected",
                extra={"kiosk_session_id": session_id, "body_size": len(raw)},
            )
            return JSONResponse(status_code=422, content={"error": exc.message})

        result = kiosk_session.load_flow(flow)
        return JSONResponse(content=_step_payload(kiosk_session, result))


@router.get("/{session_id}/enqueue-payload")
async def get_enqueue_payload(
    session_id: str,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> JSONResponse:
    """Último payload de enqueue entregue à fila por esta sessão."""
    with _bound_session(manager, session_id) as kiosk_session:
        payload = kiosk_session.last_enqueue
        if payload is None:
            return JSONResponse(
                status_code=404,
                content={"error": "Nenhum enqueue registrado nesta sessão"},
            )
        return JSONResponse(content=payload.to_dict())


@router.delete("/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    manager: KioskSessionManager = Depends(get_session_manager),
) -> Response:
    """Encerra a sessão, cancelando efeito em voo."""
    try:
        manager.close(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
