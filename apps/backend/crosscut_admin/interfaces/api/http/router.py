"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por área (dashboard/resources).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición y evitar side-effects al importar.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por área)

Notas:
  - Este router se incluye desde crosscut_admin/api/main.py con prefix="/v1".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.dashboard import router as dashboard_router
from .routers.resources import router as resources_router


def build_router() -> APIRouter:
    """
    Construye el router raíz v1.

    Orden:
      - dashboard primero: /dashboard/metrics no debe caer en /{collection}/{id}.
    """
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(dashboard_router)
    api_router.include_router(resources_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
