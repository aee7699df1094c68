# app/services/storefront_service.py
from collections.abc import Iterable

from app.schemas.product import ProductView
from app.schemas.storefront import ProductCard, StorefrontPage

# Cosmetic skeleton hints for the landing page client
LOADING_DELAY_MS = 2000
SKELETON_COUNT = 3


def product_href(product_id: str) -> str:
    return f"/product/{product_id}"


def build_storefront_page(
    products: Iterable[ProductView],
    cart_product_ids: set[str],
) -> StorefrontPage:
    """
    Compose the landing page: one card per product, catalog order kept.

    A card is disabled when its product is already in the cart.
    """
    cards = []
    for product in products:
        in_cart = product.id in cart_product_ids
        cards.append(
            ProductCard(
                product=product,
                href=product_href(product.id),
                prefetch=False,
                in_cart=in_cart,
                disabled=in_cart,
            )
        )

    return StorefrontPage(
        products=cards,
        loading_delay_ms=LOADING_DELAY_MS,
        skeleton_count=SKELETON_COUNT,
    )
