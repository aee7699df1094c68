# app/routers/products.py
import secrets
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.routers.cart import service as cart_service
from app.schemas.product import CatalogRevalidateRead, ProductView
from app.schemas.storefront import StorefrontPage
from app.services.catalog_cache import CatalogCache, get_catalog_cache
from app.services.storefront_service import build_storefront_page

router = APIRouter(tags=["Catalog"])


@router.get("/products", response_model=list[ProductView])
def list_products(catalog: CatalogCache = Depends(get_catalog_cache)):
    """
    Current catalog, in provider order.

    - Public endpoint.
    - Served from the catalog cache (regenerated every 2 hours).
    """
    return catalog.get()


@router.get("/storefront", response_model=StorefrontPage)
def get_storefront(
    cart_id: uuid.UUID | None = None,
    catalog: CatalogCache = Depends(get_catalog_cache),
    session: Session = Depends(get_session),
):
    """
    Landing page payload.

    - Without cart_id every card is enabled.
    - With cart_id, products already in that cart come back disabled.
    """
    products = catalog.get()
    in_cart = cart_service.product_ids(session, cart_id) if cart_id else set()
    return build_storefront_page(products, in_cart)


@router.post("/catalog/revalidate", response_model=CatalogRevalidateRead)
def revalidate_catalog(
    x_revalidate_token: str | None = Header(default=None),
    catalog: CatalogCache = Depends(get_catalog_cache),
):
    """
    Force a catalog regeneration.

    Requires the X-Revalidate-Token header when REVALIDATE_TOKEN is set.
    On upstream failure the previous catalog keeps being served (502).
    """
    expected = get_settings().REVALIDATE_TOKEN
    if expected and not (
        x_revalidate_token and secrets.compare_digest(x_revalidate_token, expected)
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid revalidation token",
        )

    products = catalog.revalidate()
    return CatalogRevalidateRead(revalidated=True, product_count=len(products))
