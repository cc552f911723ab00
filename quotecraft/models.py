# quotecraft/models.py
from __future__ import annotations

from typing import List, Optional

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


# ---------------------------------------------------------------------
# Plain (non-table) SQLModel classes. Validation mirrors the form schema:
# names need two characters, numbers must not be negative.
# Aliases keep the camelCase keys used in the JSON documents.
# ---------------------------------------------------------------------

class _Document(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ProductLineItem(_Document):
    product_description: str = Field(alias="productDescription")
    length_feet: float = Field(default=0, ge=0, alias="lengthFeet")
    length_inches: float = Field(default=0, ge=0, alias="lengthInches")
    width_feet: float = Field(default=0, ge=0, alias="widthFeet")
    width_inches: float = Field(default=0, ge=0, alias="widthInches")
    # price per square foot captured when the product was picked
    price: float = Field(ge=0)


class Quote(_Document):
    customer_name: str = Field(min_length=2, alias="customerName")
    project_name: str = Field(min_length=2, alias="projectName")
    description: Optional[str] = None
    products: List[ProductLineItem] = Field(default_factory=list)
    total: float = 0.0
    quote_number: Optional[str] = Field(default=None, alias="quoteNumber")


class CatalogProduct(_Document):
    description: str = Field(min_length=2)
    square_footage_price: float = Field(ge=0, alias="squareFootagePrice")
    dimensions: Optional[str] = None


class Customer(_Document):
    id: str
    company_name: str = Field(default="", alias="companyName")
    representative_name: str = Field(default="", alias="representativeName")
    address: str = ""
    phone: str = ""
    email: str = ""
    tax_exempt: bool = Field(default=False, alias="taxExempt")
