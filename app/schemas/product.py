# app/schemas/product.py
from pydantic import BaseModel, ConfigDict, Field


class ProductView(BaseModel):
    """
    Normalized catalog entry built from one provider product record.

    Frozen: a catalog regeneration replaces these wholesale, it never
    edits them. Serialized with camelCase keys (imageUrl, numberPrice,
    defaultPriceId) for the storefront client.

    `price` is display-only. Use `number_price` for any arithmetic.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    image_url: str = Field(alias="imageUrl")
    price: str
    number_price: float = Field(alias="numberPrice")
    default_price_id: str = Field(alias="defaultPriceId")


class CatalogRevalidateRead(BaseModel):
    """
    Result of an on-demand catalog regeneration.
    """

    revalidated: bool
    product_count: int
