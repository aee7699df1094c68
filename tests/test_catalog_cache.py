import threading

import pytest

from app.core.exceptions import ProviderError
from app.services.catalog_cache import CatalogCache
from app.services.catalog_service import fetch_catalog


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(provider, clock):
    return CatalogCache(lambda: fetch_catalog(provider), revalidate_seconds=7200, clock=clock)


def test_fetches_on_demand_when_empty(cache, provider):
    assert provider.calls == 0
    assert [p.id for p in cache.get()] == ["prod_1", "prod_2", "prod_3"]
    assert provider.calls == 1


def test_serves_cached_catalog_while_fresh(cache, provider, clock):
    cache.get()
    clock.now += 7199
    cache.get()
    assert provider.calls == 1


def test_regenerates_after_revalidate_interval(cache, provider, clock, make_raw_product):
    cache.get()
    provider.records = [make_raw_product("prod_9")]
    clock.now += 7200

    assert [p.id for p in cache.get()] == ["prod_9"]
    assert provider.calls == 2


def test_serves_stale_catalog_when_regeneration_fails(cache, provider, clock, make_raw_product):
    first = cache.get()
    provider.records = [make_raw_product("bad", images=[])]
    clock.now += 7200

    assert cache.get() == first


def test_failure_without_cached_catalog_propagates(cache, provider, make_raw_product):
    provider.records = [make_raw_product("bad", images=[])]
    with pytest.raises(ProviderError):
        cache.get()


def test_revalidate_forces_fetch(cache, provider):
    cache.get()
    cache.revalidate()
    assert provider.calls == 2


def test_failed_revalidate_raises_and_keeps_previous(cache, provider, make_raw_product):
    first = cache.get()
    provider.records = [make_raw_product("bad", images=[])]

    with pytest.raises(ProviderError):
        cache.revalidate()
    assert cache.get() == first


def test_find(cache):
    assert cache.find("prod_2").name == "Camiseta Explorer"
    assert cache.find("missing") is None


def test_serves_stale_catalog_when_later_record_is_malformed(cache, provider, clock, make_raw_product):
    first = cache.get()
    provider.records = [make_raw_product("bad", images=[None])]
    clock.now += 7200

    assert cache.get() == first


def test_concurrent_get_does_not_wait_for_regeneration(provider, clock, make_raw_product):
    started = threading.Event()
    release = threading.Event()
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) > 1:
            started.set()
            release.wait(timeout=5)
        return fetch_catalog(provider)

    cache = CatalogCache(fetcher, revalidate_seconds=7200, clock=clock)
    first = cache.get()
    provider.records = [make_raw_product("prod_9")]
    clock.now += 7200

    refresher = threading.Thread(target=cache.get)
    refresher.start()
    assert started.wait(timeout=5)

    # regeneration is still blocked in the fetcher
    assert cache.get() == first

    release.set()
    refresher.join(timeout=5)
    assert [p.id for p in cache.get()] == ["prod_9"]
    assert len(calls) == 2
