"""Settings do runtime de quiosque.

Latência do efeito simulado (impressão/enqueue) e limites de sessões vivas.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class KioskSettings:
    """Configurações do runtime de sessões.

    Attributes:
        effect_latency_seconds: Janela do efeito assíncrono simulado
        max_sessions: Máximo de sessões vivas por processo
        session_ttl_seconds: Sessões ociosas além disso expiram
    """

    effect_latency_seconds: float = 2.0
    max_sessions: int = 100
    session_ttl_seconds: int = 1800  # 30 min

    def validate(self) -> list[str]:
        """Valida configurações do runtime.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.effect_latency_seconds < 0:
            errors.append("KIOSK_EFFECT_LATENCY_SECONDS deve ser >= 0")

        if self.max_sessions < 1:
            errors.append("KIOSK_MAX_SESSIONS deve ser >= 1")

        if self.session_ttl_seconds <= 0:
            errors.append("KIOSK_SESSION_TTL_SECONDS deve ser > 0")

        return errors


def _load_kiosk_from_env() -> KioskSettings:
    """Carrega KioskSettings de variáveis de ambiente."""
    return KioskSettings(
        effect_latency_seconds=float(os.getenv("KIOSK_EFFECT_LATENCY_SECONDS", "2.0")),
        max_sessions=int(os.getenv("KIOSK_MAX_SESSIONS", "100")),
        session_ttl_seconds=int(os.getenv("KIOSK_SESSION_TTL_SECONDS", "1800")),
    )


@lru_cache(maxsize=1)
def get_kiosk_settings() -> KioskSettings:
    """Retorna instância cacheada de KioskSettings."""
    return _load_kiosk_from_env()
