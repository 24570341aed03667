"""
============================================================
TARJETA CRC — infrastructure/catalog/json_file_product_catalog.py
============================================================
Class: JsonFileProductCatalog

Responsibilities:
  - Implementar ProductCatalog leyendo el archivo de datos de PLM
    ({"products": [...]}).
  - Leer en un thread (asyncio.to_thread) para no bloquear el event loop.
  - Traducir archivo ausente / JSON inválido / forma inválida a
    ProductCatalogError.

Collaborators:
  - infrastructure.catalog.product_payloads (parse_products)
  - crosscutting.exceptions (ProductCatalogError)
============================================================
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import List

from pydantic import ValidationError

from ...crosscutting.exceptions import ProductCatalogError
from ...domain.entities import Product
from .product_payloads import parse_products


class JsonFileProductCatalog:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def list_products(self) -> List[Product]:
        return await asyncio.to_thread(self._read)

    def _read(self) -> List[Product]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ProductCatalogError(
                f"Cannot read product catalog: {exc.__class__.__name__}",
                source=str(self._path),
                original_error=exc,
            ) from exc

        try:
            return parse_products(raw)
        except ValidationError as exc:
            raise ProductCatalogError(
                "Product catalog has an invalid shape",
                source=str(self._path),
                original_error=exc,
            ) from exc
