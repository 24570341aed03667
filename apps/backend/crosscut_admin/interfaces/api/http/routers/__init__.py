"""
===============================================================================
TARJETA CRC — crosscut_admin/interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por área para ser incluidos por el router
      principal.

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .dashboard import router as dashboard_router
from .resources import router as resources_router

__all__ = [
    "dashboard_router",
    "resources_router",
]
