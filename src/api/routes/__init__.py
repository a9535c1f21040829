"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (health, editor de fluxos, sessões)
- Validação inicial de request (corpo, path params)
- Delegação para app/sessions e ai/services
- Respostas HTTP apropriadas

Estrutura:
- routes/health/: health checks e readiness
- routes/flows/: fluxo padrão, validação e geração
- routes/sessions/: ciclo de vida e eventos de sessões

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
