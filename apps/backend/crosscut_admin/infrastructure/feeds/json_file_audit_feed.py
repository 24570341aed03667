"""
============================================================
TARJETA CRC — infrastructure/feeds/json_file_audit_feed.py
============================================================
Class: JsonFileAuditFeed

Responsibilities:
  - Implementar AuditFeed leyendo el audit log que escribe BPO
    (un array JSON de entradas, en orden de escritura).
  - Validar cada entrada con pydantic y mapearla a AuditEvent.
  - Descartar (con warning) las entradas inválidas: una entrada rota no
    invalida el resto del feed.
  - Traducir archivo ilegible / JSON inválido / documento que no es array
    a AuditFeedError.

Collaborators:
  - domain.audit.AuditEvent
  - crosscutting.exceptions (AuditFeedError)

Notes:
  - BPO serializa timestamps RFC3339 con hasta 9 decimales (nanosegundos);
    se truncan a microsegundos antes de validar.
  - Un archivo inexistente es un feed vacío (BPO todavía no escribió nada).
============================================================
"""

from __future__ import annotations

import asyncio
import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...crosscutting.exceptions import AuditFeedError
from ...crosscutting.logger import logger
from ...domain.audit import AuditEvent

_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def trim_sub_microseconds(value: str) -> str:
    """'...:37.123456789Z' -> '...:37.123456Z'"""
    return _FRACTION_RE.sub(r"\1", value, count=1)


class AuditEntryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    timestamp: datetime
    workflow_id: str = Field(min_length=1)
    event: str
    action: str
    status: str
    details: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def trim_timestamp(cls, v: Any) -> Any:
        return trim_sub_microseconds(v) if isinstance(v, str) else v

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)

    @field_validator("details", mode="before")
    @classmethod
    def null_details(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("error", mode="before")
    @classmethod
    def empty_error(cls, v: Any) -> Any:
        return v or None

    def to_domain(self) -> AuditEvent:
        return AuditEvent(
            timestamp=self.timestamp,
            workflow_id=self.workflow_id,
            event=self.event,
            action=self.action,
            status=self.status,
            details=dict(self.details),
            error=self.error,
        )


def parse_audit_entries(raw: Any, *, source: str) -> List[AuditEvent]:
    """Mapea el documento del audit log a eventos, en el orden del archivo."""
    if not isinstance(raw, list):
        raise AuditFeedError("Audit log must be a JSON array", source=source)

    events: List[AuditEvent] = []
    for index, item in enumerate(raw):
        try:
            events.append(AuditEntryPayload.model_validate(item).to_domain())
        except ValidationError as exc:
            logger.warning(
                "audit log: entrada inválida descartada",
                extra={
                    "source": source,
                    "index": index,
                    "errors": exc.error_count(),
                },
            )
    return events


class JsonFileAuditFeed:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def read_events(self) -> List[AuditEvent]:
        return await asyncio.to_thread(self._read)

    def _read(self) -> List[AuditEvent]:
        source = str(self._path)
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise AuditFeedError(
                f"Cannot read audit log: {exc.__class__.__name__}",
                source=source,
                original_error=exc,
            ) from exc
        return parse_audit_entries(raw, source=source)
