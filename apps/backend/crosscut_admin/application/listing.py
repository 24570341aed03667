"""
Name: List Query (filter / search / sort / page)

Responsibilities:
  - Apply the admin list controls (q, field filters, sort, order, offset,
    limit) to the flat records of a collection
  - Report the total after filtering, before paging

Collaborators:
  - application.resource_records: record vocabulary per collection
  - crosscutting.pagination: offset/limit slicing

Notes:
  - The facade never filters; this runs at the caller side over a full list
  - Sorting is stable and places missing values last regardless of order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..crosscutting.pagination import DEFAULT_LIMIT, Page, paginate
from .resource_records import Record

SORT_ASC = "ASC"
SORT_DESC = "DESC"


@dataclass(frozen=True)
class ListQuery:
    q: Optional[str] = None
    filters: Mapping[str, str] = field(default_factory=dict)
    sort: Optional[str] = None
    order: str = SORT_ASC
    offset: int = 0
    limit: int = DEFAULT_LIMIT


def _matches_search(record: Record, needle: str) -> bool:
    needle = needle.casefold()
    return any(
        needle in value.casefold()
        for value in record.values()
        if isinstance(value, str)
    )


def _matches_filters(record: Record, filters: Mapping[str, str]) -> bool:
    for key, expected in filters.items():
        value = record.get(key)
        if value is None or str(value) != expected:
            return False
    return True


def _sort_records(records: List[Record], key: str, order: str) -> List[Record]:
    present = [r for r in records if r.get(key) is not None]
    missing = [r for r in records if r.get(key) is None]

    def sort_key(record: Record) -> Tuple[int, Any]:
        value = record[key]
        # Tipos mezclados: cada grupo se compara solo consigo mismo.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return (0, value)
        if isinstance(value, datetime):
            return (2, value)
        return (1, str(value))

    present.sort(key=sort_key, reverse=order.upper() == SORT_DESC)
    return present + missing


def apply_list_query(records: Iterable[Record], query: ListQuery) -> Page[Dict[str, Any]]:
    """Filtra, busca, ordena y pagina; page_info.total es el total filtrado."""
    selected = list(records)

    if query.q:
        selected = [r for r in selected if _matches_search(r, query.q)]
    if query.filters:
        selected = [r for r in selected if _matches_filters(r, query.filters)]
    if query.sort:
        selected = _sort_records(selected, query.sort, query.order)

    return paginate(selected, offset=query.offset, limit=query.limit)
