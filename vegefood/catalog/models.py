"""Catalog models - Pydantic models for static product data."""
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vegefood.services.money import parse_decimal


class Product(BaseModel):
    """Product as served by the static catalog. Immutable once loaded."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int
    name: str
    category: str
    price: Decimal = Field(ge=0)
    image: str = ""
    description: str = ""
    in_stock: bool = Field(default=True, alias="inStock")
    rating: Decimal = Decimal("0")

    @field_validator("price", "rating", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return parse_decimal(v)

    def to_dict(self) -> dict:
        """Storage form; keys match the catalog JSON."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": float(self.price),
            "image": self.image,
            "description": self.description,
            "inStock": self.in_stock,
            "rating": float(self.rating),
        }


class Category(BaseModel):
    """Product category."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int
    name: str
    description: str = ""
    image_url: str = Field(default="", alias="imageUrl")
