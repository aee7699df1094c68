# app/services/catalog_service.py
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from app.core.currency import format_currency
from app.core.exceptions import ProviderError
from app.schemas.product import ProductView

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """
    Anything that can list raw provider products with the default price
    expanded inline (see app.core.stripe_client.StripeCatalogProvider).
    """

    def list_products(self) -> Iterable[Mapping[str, Any]]: ...


def to_product_view(
    raw: Mapping[str, Any],
    *,
    locale: str = "pt-BR",
    currency: str = "BRL",
    require_unit_amount: bool = True,
) -> ProductView:
    """
    Map one raw provider product into a ProductView.

    Rules:
      - default_price must be expanded (an object, not a bare id)
      - unit_amount is validated once here; when missing it is either
        rejected (require_unit_amount=True) or read as 0 everywhere
      - number_price = unit_amount / 100
      - image_url = first image; a missing, empty or non-string list is rejected

    Raises:
        ProviderError: if the record cannot be mapped.
    """
    product_id = raw.get("id")
    if not product_id:
        raise ProviderError("Product record has no id")

    price = raw.get("default_price")
    if not isinstance(price, Mapping) or not price.get("id"):
        raise ProviderError(f"Product {product_id} has no expanded default price")

    unit_amount = price.get("unit_amount")
    if unit_amount is None:
        if require_unit_amount:
            raise ProviderError(f"Price {price['id']} of product {product_id} has no unit_amount")
        unit_amount = 0
    if isinstance(unit_amount, bool) or not isinstance(unit_amount, int):
        raise ProviderError(f"Price {price['id']} of product {product_id} has a non-integer unit_amount")

    name = raw.get("name")
    if not isinstance(name, str):
        raise ProviderError(f"Product {product_id} has no name")

    images = raw.get("images")
    if not isinstance(images, list) or not images:
        raise ProviderError(f"Product {product_id} has no images")
    image_url = images[0]
    if not isinstance(image_url, str) or not image_url:
        raise ProviderError(f"Product {product_id} has an invalid first image")

    number_price = unit_amount / 100

    try:
        return ProductView(
            id=product_id,
            name=name,
            image_url=image_url,
            price=format_currency(number_price, locale=locale, currency=currency),
            number_price=number_price,
            default_price_id=price["id"],
        )
    except ValidationError as e:
        raise ProviderError(f"Product {product_id} could not be mapped: {e}") from e


def fetch_catalog(
    provider: CatalogProvider,
    *,
    locale: str = "pt-BR",
    currency: str = "BRL",
    require_unit_amount: bool = True,
) -> list[ProductView]:
    """
    Fetch every product from the provider and map it, keeping provider order.

    A single bad record or upstream failure fails the whole fetch; the
    caller decides whether to keep serving an older catalog.
    """
    products = [
        to_product_view(
            raw,
            locale=locale,
            currency=currency,
            require_unit_amount=require_unit_amount,
        )
        for raw in provider.list_products()
    ]
    logger.info("Fetched catalog with %d products", len(products))
    return products
