# =============================================================================
# FILE: infrastructure/catalog/in_memory_product_catalog.py
# =============================================================================
"""
In-Memory Product Catalog for testing and local development.

NOT FOR PRODUCTION USE - the PLM service is the source of truth.
"""

from __future__ import annotations

from typing import Iterable, List

from ...domain.entities import Product, ProductComponent


class InMemoryProductCatalog:
    """
    In-memory implementation of ProductCatalog.

    Useful for:
      - Unit testing
      - Running the admin without a PLM service (PRODUCT_SOURCE=memory)
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: List[Product] = list(products)

    async def list_products(self) -> List[Product]:
        return list(self._products)


def _power_test(voltage: str) -> ProductComponent:
    return ProductComponent(
        name="PowerTest", voltage=voltage, test_type="power_supply_validation"
    )


DEMO_PRODUCTS: tuple[Product, ...] = (
    Product(
        name="ROUTER-100",
        voltage="12V",
        description="High-performance network router",
        revision="C",
        components=[_power_test("12V")],
    ),
    Product(
        name="SWITCH-200",
        voltage="24V",
        description="Managed network switch",
        revision="B",
        components=[_power_test("24V")],
    ),
)


def demo_product_catalog() -> InMemoryProductCatalog:
    """R: Catalog seeded with the PLM demo products."""
    return InMemoryProductCatalog(DEMO_PRODUCTS)
