# app/services/catalog_cache.py
import logging
import threading
import time
from functools import lru_cache
from typing import Callable

from app.core.config import get_settings
from app.core.exceptions import ProviderError
from app.core.stripe_client import stripe_provider
from app.schemas.product import ProductView
from app.services.catalog_service import fetch_catalog

logger = logging.getLogger(__name__)


class CatalogCache:
    """
    Holds the last good catalog and decides when to regenerate it.

    Responsibilities:
      - regenerate on demand when nothing is cached yet
      - regenerate once the cached catalog is older than revalidate_seconds
      - serialize regenerations (one fetch at a time per cache) without
        making readers wait when a catalog is already cached
      - on a failed regeneration keep serving the last good catalog;
        with nothing cached, let ProviderError propagate
    """

    def __init__(
        self,
        fetcher: Callable[[], list[ProductView]],
        revalidate_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.fetcher = fetcher
        self.revalidate_seconds = revalidate_seconds
        self.clock = clock
        self._lock = threading.Lock()
        self._products: tuple[ProductView, ...] | None = None
        self._fetched_at: float | None = None

    # ---- internal helpers ----

    def _is_stale(self) -> bool:
        if self._fetched_at is None:
            return True
        return self.clock() - self._fetched_at >= self.revalidate_seconds

    def _regenerate(self) -> tuple[ProductView, ...]:
        products = tuple(self.fetcher())
        self._products = products
        self._fetched_at = self.clock()
        return products

    # ---- public operations ----

    def get(self) -> list[ProductView]:
        """
        Return the current catalog, regenerating it first if needed.

        Only the first load blocks on a regeneration in progress; once a
        catalog exists, concurrent callers get it while the refresh runs.

        Raises:
            ProviderError: only when regeneration fails and no earlier
            catalog is available.
        """
        products = self._products
        if products is not None and not self._is_stale():
            return list(products)

        if products is None:
            self._lock.acquire()
        elif not self._lock.acquire(blocking=False):
            # another request is regenerating; keep serving the stale catalog
            return list(products)

        try:
            # re-check, a concurrent regeneration may have just finished
            if self._products is not None and not self._is_stale():
                return list(self._products)

            try:
                return list(self._regenerate())
            except ProviderError as e:
                if self._products is None:
                    raise
                logger.warning("Catalog regeneration failed, serving stale catalog: %s", e)
                return list(self._products)
        finally:
            self._lock.release()

    def revalidate(self) -> list[ProductView]:
        """
        Force a regeneration now.

        On failure the previous catalog is kept and ProviderError is raised
        so the caller knows the refresh did not happen.
        """
        with self._lock:
            return list(self._regenerate())

    def find(self, product_id: str) -> ProductView | None:
        return next((p for p in self.get() if p.id == product_id), None)


@lru_cache
def get_catalog_cache() -> CatalogCache:
    """
    Process-wide catalog cache backed by Stripe.

    Used as a FastAPI dependency; tests override it.
    """
    settings = get_settings()

    def fetcher() -> list[ProductView]:
        return fetch_catalog(
            stripe_provider(),
            locale=settings.CATALOG_LOCALE,
            currency=settings.CATALOG_CURRENCY,
            require_unit_amount=settings.CATALOG_REQUIRE_UNIT_AMOUNT,
        )

    return CatalogCache(fetcher, revalidate_seconds=settings.CATALOG_REVALIDATE_SECONDS)
