from .in_memory_product_catalog import (
    DEMO_PRODUCTS,
    InMemoryProductCatalog,
    demo_product_catalog,
)
from .json_file_product_catalog import JsonFileProductCatalog

__all__ = [
    "DEMO_PRODUCTS",
    "InMemoryProductCatalog",
    "demo_product_catalog",
    "JsonFileProductCatalog",
]
