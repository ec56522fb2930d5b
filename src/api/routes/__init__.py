"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (eventos, health)
- Validação inicial do corpo da requisição
- Delegação para o dispatcher de app/use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/events/: eventos de status de pedido
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
