"""
============================================================
TARJETA CRC — infrastructure/services/docgen_client.py
============================================================
Class: DocGenClient

Responsibilities:
  - Health check de DocGen para el dashboard.

Notes:
  - El admin no genera documentos: BPO es quien llama a DocGen.
============================================================
"""

from __future__ import annotations

import httpx

from .http_service import HttpServiceClient

DOCGEN_SERVICE = "docgen"


class DocGenClient(HttpServiceClient):
    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(DOCGEN_SERVICE, base_url, timeout_s=timeout_s, client=client)
