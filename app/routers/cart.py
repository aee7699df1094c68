# app/routers/cart.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.schemas.cart import CartItemCreate, CartMembershipRead, CartSummary
from app.services.cart_service import CartService
from app.services.catalog_cache import CatalogCache, get_catalog_cache

router = APIRouter(prefix="/cart", tags=["Cart"])

settings = get_settings()
cart_repo = CartRepository()
service = CartService(
    cart_repo,
    locale=settings.CATALOG_LOCALE,
    currency=settings.CATALOG_CURRENCY,
)


@router.get("/{cart_id}", response_model=CartSummary)
def get_cart(
    cart_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a cart summary. Unknown carts are simply empty.
    """
    return service.get_cart_summary(session, cart_id)


@router.get("/{cart_id}/items/{product_id}", response_model=CartMembershipRead)
def check_cart_item(
    cart_id: uuid.UUID,
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Is this product already in the cart?

    Read-only; safe to call once per listed product.
    """
    return service.membership(session, cart_id, product_id)


@router.post("/{cart_id}", response_model=CartSummary)
def add_to_cart(
    cart_id: uuid.UUID,
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    catalog: CatalogCache = Depends(get_catalog_cache),
):
    """
    Add a catalog product to the cart.

    - 404 if the product is not in the current catalog.
    - 409 if it is already in the cart.

    Returns the updated cart summary.
    """
    product = catalog.find(payload.product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return service.add_to_cart(session, cart_id, product)


@router.delete("/{cart_id}/items/{product_id}", response_model=CartSummary)
def remove_cart_item(
    cart_id: uuid.UUID,
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Remove a product from the cart.

    Returns the updated cart summary.
    """
    return service.remove_item(session, cart_id, product_id)


@router.delete("/{cart_id}", response_model=CartSummary)
def clear_cart(
    cart_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Clear the entire cart.

    Returns an empty cart summary.
    """
    return service.clear_cart(session, cart_id)
