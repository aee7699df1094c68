# app/schemas/storefront.py
from pydantic import BaseModel

from app.schemas.product import ProductView


class ProductCard(BaseModel):
    """
    One product as listed on the landing page.

    - href: detail page, /product/<id>
    - prefetch: always False (detail data is not warmed)
    - disabled: True when the product is already in the cart,
      so the add button must not fire again.
    """

    product: ProductView
    href: str
    prefetch: bool = False
    in_cart: bool
    disabled: bool


class StorefrontPage(BaseModel):
    """
    Landing page payload.

    loading_delay_ms / skeleton_count are hints for the client's cosmetic
    skeleton timer; the server never waits on them.
    """

    products: list[ProductCard]
    loading_delay_ms: int
    skeleton_count: int
