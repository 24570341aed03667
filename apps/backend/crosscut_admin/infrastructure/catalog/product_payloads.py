"""
Name: PLM Product Payloads

Responsibilities:
  - Validate the PLM product JSON shape ({"products": [...]})
  - Map validated payloads to domain Product / ProductComponent

Collaborators:
  - infrastructure.catalog.json_file_product_catalog: PLM data file
  - infrastructure.services.plm_client: GET /products response

Notes:
  - Unknown fields are ignored (PLM adds fields like "count")
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from ...domain.entities import Product, ProductComponent


class ComponentPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    voltage: str = ""
    test_type: str = ""

    def to_domain(self) -> ProductComponent:
        return ProductComponent(
            name=self.name, voltage=self.voltage, test_type=self.test_type
        )


class ProductPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    voltage: str = ""
    description: str = ""
    revision: str = ""
    components: List[ComponentPayload] = Field(default_factory=list)

    def to_domain(self) -> Product:
        return Product(
            name=self.name,
            voltage=self.voltage,
            description=self.description,
            revision=self.revision,
            components=[c.to_domain() for c in self.components],
        )


class ProductListPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    products: List[ProductPayload] = Field(default_factory=list)


def parse_products(raw: Any) -> List[Product]:
    """R: Raises pydantic.ValidationError when the document shape is wrong."""
    payload = ProductListPayload.model_validate(raw)
    return [p.to_domain() for p in payload.products]
