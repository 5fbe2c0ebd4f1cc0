from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from storefront.models.product import Product

DEFAULT_CATEGORY = "Shirts"
PLACEHOLDER_IMAGE = "https://picsum.photos/400/500"


class ProductCreate(SQLModel):
    """
    Admin payload for adding a product.

    - id is assigned by the service (time-derived).
    - category defaults to 'Shirts', image to a placeholder.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    price: float = Field(ge=0)
    category: str = Field(default=DEFAULT_CATEGORY, max_length=50)
    image: str | None = None

    @field_validator("name", "category")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("image")
    @classmethod
    def normalize_image(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class ProductRead(Product):
    """Product representation for clients."""

    pass
