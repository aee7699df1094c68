# app/core/stripe_client.py
import logging
from functools import lru_cache
from typing import Any, Iterator

import requests

from app.core.config import get_settings
from app.core.exceptions import ProviderError

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class StripeCatalogProvider:
    """
    Thin client over Stripe's product listing endpoint.

    Only one call is needed by the storefront:

        GET /v1/products?expand[]=data.default_price

    Pages are followed with `starting_after` until `has_more` is false.
    Records are yielded as plain dicts, in the order Stripe returns them.

    No retries: any failure aborts the whole listing with ProviderError.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.stripe.com",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def _get_page(self, starting_after: str | None) -> dict[str, Any]:
        params: dict[str, Any] = {
            "expand[]": "data.default_price",
            "limit": PAGE_SIZE,
        }
        if starting_after:
            params["starting_after"] = starting_after

        url = f"{self.api_base}/v1/products"
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            body = r.json()
        except requests.RequestException as e:
            raise ProviderError(f"Stripe product listing failed: {e}") from e
        except ValueError as e:
            raise ProviderError("Stripe returned a non-JSON body") from e

        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise ProviderError("Stripe returned an unexpected list payload")
        return body

    def list_products(self) -> Iterator[dict[str, Any]]:
        starting_after: str | None = None
        while True:
            page = self._get_page(starting_after)
            data = page["data"]
            yield from data

            if not page.get("has_more") or not data:
                return
            starting_after = data[-1].get("id")
            if not starting_after:
                raise ProviderError("Stripe page has more results but no cursor id")
            logger.debug("Fetching next product page after %s", starting_after)


@lru_cache
def stripe_provider() -> StripeCatalogProvider:
    """
    Create the process-wide Stripe provider from settings.

    WARNING:
      - STRIPE_SECRET_KEY is a server-side secret. Never send it to clients.
    """
    settings = get_settings()
    return StripeCatalogProvider(
        api_key=settings.STRIPE_SECRET_KEY,
        api_base=settings.STRIPE_API_BASE,
        timeout=settings.STRIPE_TIMEOUT_SECONDS,
    )
