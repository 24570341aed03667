"""
============================================================
TARJETA CRC — infrastructure/services/http_service.py
============================================================
Class: HttpServiceClient

Responsibilities:
  - Base común para los clientes de BPO, PLM y DocGen (httpx.AsyncClient).
  - Ejecutar UNA request por llamada: sin reintentos (los triggers de BPO no
    son idempotentes y el caller decide si repetir).
  - Traducir status >= 400 y errores de transporte a UpstreamServiceError,
    conservando el status y el cuerpo de error del upstream.
  - Implementar HealthProbe (GET /health).
  - Registrar métricas por servicio/operación/resultado.

Collaborators:
  - crosscutting.exceptions (UpstreamServiceError)
  - crosscutting.metrics (record_upstream_call)
  - domain.services.HealthProbe
  - httpx (HTTP client)
============================================================
"""

from __future__ import annotations

import time
from typing import Any, Dict

import httpx

from ...crosscutting.exceptions import UpstreamServiceError
from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_upstream_call
from ...domain.entities import ServiceHealth

_HEALTH_PATH = "/health"


class HttpServiceClient:
    """
    Cliente HTTP async de un servicio CrossCut.

    El AsyncClient se puede inyectar (tests con httpx.MockTransport); si no,
    se crea uno propio con base_url y timeout y se cierra en aclose().
    """

    def __init__(
        self,
        service: str,
        base_url: str,
        *,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url:
            raise ValueError(f"base_url is required for {service}")
        self._service = service
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    @property
    def service_name(self) -> str:
        return self._service

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # HealthProbe
    # ------------------------------------------------------------------

    async def check_health(self) -> ServiceHealth:
        body = await self._request_json("GET", _HEALTH_PATH, operation="health")
        return ServiceHealth(
            service=str(body.get("service") or self._service),
            status=str(body.get("status") or "unknown"),
            version=body.get("version"),
        )

    # ------------------------------------------------------------------
    # Request helper (interno)
    # ------------------------------------------------------------------

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: Any = None,
    ) -> Dict[str, Any]:
        """Una request; devuelve el cuerpo JSON (objeto) o lanza UpstreamServiceError."""
        url = f"{self._base_url}{path}"
        started = time.perf_counter()
        try:
            resp = await self._client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            reason = "timeout" if isinstance(exc, httpx.TimeoutException) else "transport"
            self._record(operation, reason, started)
            raise UpstreamServiceError(
                f"{self._service} {operation} failed: {exc.__class__.__name__}",
                service=self._service,
                original_error=exc,
            ) from exc

        if resp.status_code >= 400:
            self._record(operation, _classify_status(resp.status_code), started)
            upstream_code, upstream_message = _parse_error_body(resp)
            logger.warning(
                "upstream respondió con error",
                extra={
                    "service": self._service,
                    "operation": operation,
                    "status": resp.status_code,
                    "upstream_code": upstream_code,
                },
            )
            raise UpstreamServiceError(
                upstream_message
                or f"{self._service} {operation} returned HTTP {resp.status_code}",
                service=self._service,
                status_code=resp.status_code,
                upstream_code=upstream_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            self._record(operation, "invalid_body", started)
            raise UpstreamServiceError(
                f"{self._service} {operation} returned a non-JSON body",
                service=self._service,
                status_code=resp.status_code,
                original_error=exc,
            ) from exc

        if not isinstance(body, dict):
            self._record(operation, "invalid_body", started)
            raise UpstreamServiceError(
                f"{self._service} {operation} returned an unexpected body",
                service=self._service,
                status_code=resp.status_code,
            )

        self._record(operation, "ok", started)
        return body

    def _record(self, operation: str, outcome: str, started: float) -> None:
        record_upstream_call(
            self._service, operation, outcome, time.perf_counter() - started
        )


# ---------------------------------------------------------------------------
# Helpers (módulo)
# ---------------------------------------------------------------------------


def _classify_status(status_code: int) -> str:
    """Clasifica HTTP status en outcome de baja cardinalidad para métricas."""
    if status_code == 404:
        return "not_found"
    if 400 <= status_code < 500:
        return "client_error"
    return "server_error"


def _parse_error_body(resp: httpx.Response) -> tuple[str | None, str | None]:
    """Extrae {"error", "message"} del cuerpo de error de BPO/PLM, si existe."""
    try:
        body = resp.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    code = body.get("error")
    message = body.get("message")
    return (
        code if isinstance(code, str) else None,
        message if isinstance(message, str) and message else None,
    )
