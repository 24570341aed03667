"""
============================================================
TARJETA CRC — infrastructure/services/plm_client.py
============================================================
Class: PlmClient

Responsibilities:
  - Implementar ProductCatalog contra el servicio PLM (GET /products).
  - Health check de PLM (heredado de HttpServiceClient).

Collaborators:
  - infrastructure.services.http_service.HttpServiceClient
  - infrastructure.catalog.product_payloads (parse_products)
============================================================
"""

from __future__ import annotations

from typing import List

import httpx
from pydantic import ValidationError

from ...crosscutting.exceptions import UpstreamServiceError
from ...domain.entities import Product
from ..catalog.product_payloads import parse_products
from .http_service import HttpServiceClient

PLM_SERVICE = "plm"
_PRODUCTS_PATH = "/products"


class PlmClient(HttpServiceClient):
    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(PLM_SERVICE, base_url, timeout_s=timeout_s, client=client)

    async def list_products(self) -> List[Product]:
        body = await self._request_json("GET", _PRODUCTS_PATH, operation="list_products")
        try:
            return parse_products(body)
        except ValidationError as exc:
            raise UpstreamServiceError(
                "plm list_products returned an invalid catalog",
                service=PLM_SERVICE,
                original_error=exc,
            ) from exc
