"""Catalog Models - Pydantic models for stock and product payloads."""
from decimal import Decimal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from storefront.services.money import parse_money


class Stock(BaseModel):
    """Stock record: maximum quantity purchasable at query time."""
    model_config = ConfigDict(extra="ignore")

    id: int
    amount: int = Field(ge=0)


class Product(BaseModel):
    """Product descriptive data from the catalog."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    # Catalog payloads name these fields title/image
    name: str = Field(validation_alias=AliasChoices("name", "title"))
    price: Decimal
    image_url: str = Field(
        default="",
        validation_alias=AliasChoices("image_url", "imageUrl", "image"),
    )

    @field_validator("price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return parse_money(v)
