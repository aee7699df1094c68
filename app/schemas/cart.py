# app/schemas/cart.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field


class CartItemCreate(SQLModel):
    """
    Payload for adding to cart.

    The product is resolved from the current catalog by id.
    """

    product_id: str = Field(min_length=1)


class CartItemRead(SQLModel):
    """
    Read model for a single cart line (snapshot of the ProductView).
    """

    id: uuid.UUID
    cart_id: uuid.UUID
    product_id: str
    name: str
    image_url: str
    price: str
    number_price: float
    default_price_id: str
    created_at: datetime


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    cart_id: uuid.UUID
    items: list[CartItemRead]
    total_quantity: int
    total_price: float
    total_price_formatted: str


class CartMembershipRead(SQLModel):
    """
    Answer to "is this product already in the cart?".
    """

    cart_id: uuid.UUID
    product_id: str
    in_cart: bool
