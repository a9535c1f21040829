"""Registro de sessões vivas de quiosque.

Cria, resolve e encerra sessões em memória (um processo por quiosque ou
por painel de simulação). Limitado por KIOSK_MAX_SESSIONS; sessões ociosas
além do TTL expiram na próxima operação do registro.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING

from app.sessions.errors import SessionLimitExceededError, SessionNotFoundError
from app.sessions.runtime import KioskSession
from flowdoc import load_default_flow

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.sessions.enqueue import EnqueueSinkProtocol
    from flowdoc import Flow
    from navigation import EffectSimulator

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 100
DEFAULT_SESSION_TTL_SECONDS = 1800


class KioskSessionManager:
    """Gerenciador de sessões de quiosque.

    Todas as sessões compartilham o mesmo EffectSimulator, que é drenado
    no shutdown.
    """

    __slots__ = (
        "_clock",
        "_max_sessions",
        "_sessions",
        "_simulator",
        "_sink",
        "_ttl_seconds",
    )

    def __init__(
        self,
        *,
        simulator: EffectSimulator,
        enqueue_sink: EnqueueSinkProtocol,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Inicializa gerenciador.

        Args:
            simulator: Simulador de efeitos compartilhado
            enqueue_sink: Destino dos payloads de enqueue
            max_sessions: Máximo de sessões vivas
            ttl_seconds: Tempo máximo de ociosidade
            clock: Relógio monotônico (injetável em testes)
        """
        self._simulator = simulator
        self._sink = enqueue_sink
        self._max_sessions = max_sessions
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, KioskSession] = {}

    @property
    def active_count(self) -> int:
        return len(self._sessions)

    @property
    def at_capacity(self) -> bool:
        return len(self._sessions) >= self._max_sessions

    @property
    def simulator(self) -> EffectSimulator:
        return self._simulator

    @staticmethod
    def _generate_session_id() -> str:
        return f"kiosk_{uuid.uuid4().hex[:12]}"

    def create(self, flow: Flow | None = None) -> KioskSession:
        """Cria sessão na tela inicial do fluxo (default: fluxo padrão).

        Raises:
            SessionLimitExceededError: Se o limite de sessões vivas foi atingido
        """
        self.purge_expired()
        if self.at_capacity:
            logger.warning(
                "kiosk_session_limit_reached",
                extra={"max_sessions": self._max_sessions},
            )
            raise SessionLimitExceededError(self._max_sessions)

        session_id = self._generate_session_id()
        kiosk_session = KioskSession(
            session_id,
            flow or load_default_flow(),
            simulator=self._simulator,
            enqueue_sink=self._sink,
            clock=self._clock,
        )
        self._sessions[session_id] = kiosk_session
        logger.info(
            "kiosk_session_created",
            extra={
                "kiosk_session_id": session_id,
                "flow_id": kiosk_session.session.flow.flow_id,
                "active_sessions": len(self._sessions),
            },
        )
        return kiosk_session

    def get(self, session_id: str) -> KioskSession:
        """Resolve sessão viva.

        Raises:
            SessionNotFoundError: Se inexistente ou expirada
        """
        self.purge_expired()
        kiosk_session = self._sessions.get(session_id)
        if kiosk_session is None:
            raise SessionNotFoundError(session_id)
        return kiosk_session

    def close(self, session_id: str) -> None:
        """Encerra sessão, cancelando efeito em voo.

        Raises:
            SessionNotFoundError: Se inexistente
        """
        kiosk_session = self._sessions.pop(session_id, None)
        if kiosk_session is None:
            raise SessionNotFoundError(session_id)
        kiosk_session.cancel_effect()
        logger.info(
            "kiosk_session_closed",
            extra={"kiosk_session_id": session_id, "active_sessions": len(self._sessions)},
        )

    def purge_expired(self) -> int:
        """Remove sessões ociosas além do TTL.

        Returns:
            Quantidade de sessões removidas
        """
        expired = [
            session_id
            for session_id, kiosk_session in self._sessions.items()
            if kiosk_session.idle_seconds() > self._ttl_seconds
        ]
        for session_id in expired:
            self._sessions.pop(session_id).cancel_effect()

        if expired:
            logger.info(
                "kiosk_sessions_expired",
                extra={"expired_count": len(expired), "active_sessions": len(self._sessions)},
            )
        return len(expired)

    async def shutdown(self, timeout_seconds: float = 5.0) -> None:
        """Drena efeitos em voo e descarta todas as sessões."""
        await self._simulator.drain(timeout_seconds=timeout_seconds)
        count = len(self._sessions)
        self._sessions.clear()
        logger.info("kiosk_sessions_shutdown", extra={"closed_sessions": count})
