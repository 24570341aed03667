# apps/backend/crosscut_admin/crosscutting/pagination.py
"""
===============================================================================
MÓDULO: Utilidades de paginación (offset/limit sobre listas materializadas)
===============================================================================

Objetivo
--------
Paginación simple y consistente para los listados del admin:
- el facade devuelve la colección completa (proyección recalculada por call)
- el borde HTTP recorta con offset/limit y arma metadata

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  paginate + PageInfo

Responsabilidades:
  - Recortar la página pedida
  - Armar metadata has_next/has_prev, offsets vecinos y total
===============================================================================
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_LIMIT = 25
MAX_LIMIT = 500


class PageInfo(BaseModel):
    has_next: bool = Field(description="Hay más items después de esta página")
    has_prev: bool = Field(description="Hay items antes de esta página")
    next_offset: Optional[int] = Field(None, description="Offset de la próxima página")
    prev_offset: Optional[int] = Field(None, description="Offset de la página anterior")
    total: int = Field(description="Total de items luego de aplicar filtros")


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(description="Items de la página actual")
    page_info: PageInfo = Field(description="Metadatos de paginación")


def paginate(items: List[T], offset: int = 0, limit: int = DEFAULT_LIMIT) -> Page[T]:
    """
    Recorta `items` (ya filtrados y ordenados) a la página [offset, offset+limit).
    """
    limit = min(max(1, int(limit)), MAX_LIMIT)
    offset = max(0, int(offset))
    total = len(items)

    has_next = offset + limit < total
    return Page(
        items=items[offset : offset + limit],
        page_info=PageInfo(
            has_next=has_next,
            has_prev=offset > 0,
            next_offset=offset + limit if has_next else None,
            prev_offset=max(0, offset - limit) if offset > 0 else None,
            total=total,
        ),
    )
