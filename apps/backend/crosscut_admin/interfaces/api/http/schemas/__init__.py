"""
===============================================================================
TARJETA CRC — schemas/__init__.py
===============================================================================

Módulo:
    Paquete de Schemas HTTP (DTOs Pydantic)

Responsabilidades:
    - Agrupar contratos HTTP por área (resources/dashboard).
    - Mantener separados DTOs (schemas) de controladores (routers).

Reglas:
    - Schemas NO deben importar infraestructura.
    - Solo tipos y validación de input/output.
===============================================================================
"""

__all__ = []
