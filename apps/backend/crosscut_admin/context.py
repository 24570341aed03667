"""
===============================================================================
TARJETA CRC — crosscut_admin/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar el RequestContext del request en curso en un único ContextVar.
  - Derivar la colección (workflows/audit/products) desde el path /v1/...
  - Exponer el contexto como dict para los logs.

Colaboradores:
  - crosscutting.middleware: bind_request_context()/reset_request_context().
  - crosscutting.logger: get_context_dict().
  - api.exception_handlers: current_request_id().
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import asdict, dataclass
from typing import Optional

_API_PREFIX = "/v1/"


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    method: str
    path: str
    collection: Optional[str] = None


_current: ContextVar[Optional[RequestContext]] = ContextVar(
    "crosscut_request_context", default=None
)


def collection_from_path(path: str) -> Optional[str]:
    """'/v1/audit/wf-1-0' -> 'audit'. Fuera de /v1 no hay colección."""
    if not path.startswith(_API_PREFIX):
        return None
    head = path[len(_API_PREFIX):].split("/", 1)[0]
    return head or None


def bind_request_context(
    request_id: str, method: str, path: str
) -> Token[Optional[RequestContext]]:
    return _current.set(
        RequestContext(
            request_id=request_id,
            method=method,
            path=path,
            collection=collection_from_path(path),
        )
    )


def reset_request_context(token: Token[Optional[RequestContext]]) -> None:
    _current.reset(token)


def current_request_id() -> Optional[str]:
    ctx = _current.get()
    return ctx.request_id if ctx else None


def get_context_dict() -> dict[str, str]:
    ctx = _current.get()
    if ctx is None:
        return {}
    return {k: v for k, v in asdict(ctx).items() if v}
