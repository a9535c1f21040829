"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_session_manager

    # Na inicialização do serviço
    initialize_app()

    # Obter dependências
    manager = get_session_manager()
    service = get_flow_generation_service()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id, get_kiosk_session_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_kiosk_settings, get_openai_settings

if TYPE_CHECKING:
    from ai.core.client import FlowGeneratorProtocol
    from ai.services import FlowGenerationService
    from app.sessions import KioskSessionManager

# Nome do serviço para logs e métricas
SERVICE_NAME = "kiosk_sdui"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com correlation_id e kiosk_session_id
    """
    configure_logging(
        level=get_base_settings().log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        session_id_getter=get_kiosk_session_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (nível DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
        session_id_getter=get_kiosk_session_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"kiosk: {error}" for error in get_kiosk_settings().validate())
    errors.extend(f"openai: {error}" for error in get_openai_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_session_manager() -> KioskSessionManager:
    """Obtém registro de sessões (singleton)."""
    from app.sessions import KioskSessionManager, LoggingEnqueueSink
    from navigation import EffectSimulator

    settings = get_kiosk_settings()
    return KioskSessionManager(
        simulator=EffectSimulator(settings.effect_latency_seconds),
        enqueue_sink=LoggingEnqueueSink(),
        max_sessions=settings.max_sessions,
        ttl_seconds=settings.session_ttl_seconds,
    )


@lru_cache(maxsize=1)
def get_flow_generator() -> FlowGeneratorProtocol:
    """Obtém gerador de fluxos: OpenAI se configurado, senão mock."""
    openai_settings = get_openai_settings()
    if openai_settings.is_configured:
        from app.infra.ai import OpenAIFlowClient

        return OpenAIFlowClient(settings=openai_settings)

    from ai.core import MockFlowGenerator

    logger.info("flow_generator_mock_selected", extra={"component": "bootstrap"})
    return MockFlowGenerator()


@lru_cache(maxsize=1)
def get_flow_generation_service() -> FlowGenerationService:
    """Obtém serviço de geração de fluxos (singleton)."""
    from ai.services import FlowGenerationService

    return FlowGenerationService(get_flow_generator())
