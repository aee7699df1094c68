import pytest
from pydantic import ValidationError

from app.core.exceptions import ProviderError
from app.schemas.product import ProductView
from app.services.catalog_service import fetch_catalog, to_product_view


def test_maps_example_record():
    raw = {
        "id": "p1",
        "name": "Shirt",
        "images": ["http://x/img.png"],
        "default_price": {"unit_amount": 7999, "id": "price_1"},
    }

    view = to_product_view(raw)

    assert view == ProductView(
        id="p1",
        name="Shirt",
        image_url="http://x/img.png",
        price="R$ 79,99",
        number_price=79.99,
        default_price_id="price_1",
    )


def test_serializes_with_camel_case_keys(make_raw_product):
    data = to_product_view(make_raw_product("p1")).model_dump(by_alias=True)
    assert set(data) == {"id", "name", "imageUrl", "price", "numberPrice", "defaultPriceId"}


def test_number_price_is_unit_amount_over_100(make_raw_product):
    for amount in (0, 1, 99, 100, 7999, 123456):
        view = to_product_view(make_raw_product("p", unit_amount=amount))
        assert view.number_price == amount / 100


def test_image_url_is_first_image(make_raw_product):
    raw = make_raw_product("p", images=["http://a.png", "http://b.png"])
    assert to_product_view(raw).image_url == "http://a.png"


def test_empty_images_is_provider_error(make_raw_product):
    with pytest.raises(ProviderError):
        to_product_view(make_raw_product("p", images=[]))


def test_unexpanded_default_price_is_provider_error(make_raw_product):
    raw = make_raw_product("p")
    raw["default_price"] = "price_123"
    with pytest.raises(ProviderError):
        to_product_view(raw)


def test_missing_default_price_is_provider_error(make_raw_product):
    raw = make_raw_product("p")
    raw["default_price"] = None
    with pytest.raises(ProviderError):
        to_product_view(raw)


def test_missing_unit_amount_rejected_by_default(make_raw_product):
    with pytest.raises(ProviderError):
        to_product_view(make_raw_product("p", unit_amount=None))


def test_missing_unit_amount_reads_as_zero_when_lenient(make_raw_product):
    view = to_product_view(make_raw_product("p", unit_amount=None), require_unit_amount=False)
    assert view.number_price == 0
    assert view.price == "R$ 0,00"


def test_non_integer_unit_amount_is_provider_error(make_raw_product):
    with pytest.raises(ProviderError):
        to_product_view(make_raw_product("p", unit_amount="7999"))


def test_product_view_is_frozen(make_raw_product):
    view = to_product_view(make_raw_product("p"))
    with pytest.raises(ValidationError):
        view.name = "other"


def test_fetch_catalog_preserves_provider_order(provider):
    products = fetch_catalog(provider)
    assert [p.id for p in products] == ["prod_1", "prod_2", "prod_3"]


def test_fetch_catalog_one_bad_record_fails_everything(provider, make_raw_product):
    provider.records.append(make_raw_product("broken", images=[]))
    with pytest.raises(ProviderError):
        fetch_catalog(provider)


def test_fetch_catalog_uses_locale_and_currency(provider):
    products = fetch_catalog(provider, locale="en-US", currency="USD")
    assert products[1].price == "$129.90"


@pytest.mark.parametrize("images", [[None], [123], [""], "http://x/a.png", None])
def test_malformed_images_are_provider_errors(make_raw_product, images):
    raw = make_raw_product("p")
    raw["images"] = images
    with pytest.raises(ProviderError):
        to_product_view(raw)


@pytest.mark.parametrize("name", [None, 42])
def test_non_string_name_is_provider_error(make_raw_product, name):
    raw = make_raw_product("p")
    raw["name"] = name
    with pytest.raises(ProviderError):
        to_product_view(raw)


def test_missing_name_is_provider_error(make_raw_product):
    raw = make_raw_product("p")
    del raw["name"]
    with pytest.raises(ProviderError):
        to_product_view(raw)


def test_view_validation_failure_becomes_provider_error(make_raw_product):
    raw = make_raw_product("p")
    raw["id"] = 123
    with pytest.raises(ProviderError):
        to_product_view(raw)
