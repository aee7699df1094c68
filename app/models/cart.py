# app/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CartItem(SQLModel, table=True):
    """
    One product line in a shopper's cart.

    A cart cannot hold 2 rows for the same product.
    Product fields are snapshotted from the ProductView at add time.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    cart_id: uuid.UUID = Field(
        index=True,
        description="Client-held cart identifier",
    )

    product_id: str = Field(
        max_length=255,
        index=True,
        description="Commerce provider product id",
    )

    name: str
    image_url: str
    price: str = Field(description="Formatted display price at add time")
    number_price: float = Field(
        ge=0,
        description="Price in major currency units at add time",
    )
    default_price_id: str = Field(
        max_length=255,
        description="Provider price id, used by checkout",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
