# apps/backend/crosscut_admin/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logging del admin (una línea JSON por evento)
===============================================================================

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AdminJSONFormatter + configure_logger()

Responsabilidades:
  - Emitir cada LogRecord como una línea JSON con service/env.
  - Adjuntar request_id/method/path desde los ContextVars del request.
  - Copiar los campos de `extra={...}` ocultando credenciales de upstream.
  - Acotar payloads de auditoría (planes completos en `details`).

Colaboradores:
  - crosscut_admin/context.py (ContextVars)
  - crosscutting/config.py (log_level, log_json, app_env)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Mapping

SERVICE_NAME = "crosscut-admin"

# Atributos estándar de LogRecord: todo lo demás vino por `extra`.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}

_HIDDEN = "[hidden]"
_CREDENTIAL_MARKERS = ("password", "secret", "token", "authorization", "api_key")

MAX_TEXT = 2_000
MAX_ITEMS = 50
MAX_NESTING = 3


def _is_credential(key: str) -> bool:
    lowered = key.lower().replace("-", "_")
    return any(marker in lowered for marker in _CREDENTIAL_MARKERS)


def scrub(value: Any, nesting: int = 0) -> Any:
    """Devuelve una copia JSON-friendly de `value` sin credenciales y acotada."""
    if isinstance(value, Mapping):
        if nesting >= MAX_NESTING:
            return f"<{len(value)} keys>"
        return {
            str(k): _HIDDEN if _is_credential(str(k)) else scrub(v, nesting + 1)
            for k, v in list(value.items())[:MAX_ITEMS]
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        if nesting >= MAX_NESTING:
            return f"<{len(value)} items>"
        return [scrub(v, nesting + 1) for v in list(value)[:MAX_ITEMS]]
    if isinstance(value, str):
        return value if len(value) <= MAX_TEXT else value[:MAX_TEXT] + "..."
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class AdminJSONFormatter(logging.Formatter):
    """LogRecord -> JSON (una línea)."""

    def __init__(self, env: str):
        super().__init__()
        self._env = env

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "env": self._env,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }
        entry.update(get_context_dict())

        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key in entry:
                continue
            entry[key] = _HIDDEN if _is_credential(key) else scrub(value)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_type"] = type(record.exc_info[1]).__name__
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logger(name: str = SERVICE_NAME) -> logging.Logger:
    """Configura (una sola vez) el logger del servicio según Settings."""
    from .config import get_settings

    settings = get_settings()

    log = logging.getLogger(name)
    log.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_json:
            handler.setFormatter(AdminJSONFormatter(settings.app_env))
        else:
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
        log.addHandler(handler)

    return log


logger = configure_logger()
