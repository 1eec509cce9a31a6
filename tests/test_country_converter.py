import pytest

from magento_migration.converters import CountryConverter
from magento_migration.models import EmptyNecessaryFieldRunLog
from magento_migration.utils.constants import DefaultEntities


@pytest.fixture
def converter(mapping_service, logging_service):
    return CountryConverter(mapping_service=mapping_service, logging_service=logging_service)


@pytest.fixture
def context(make_context):
    return make_context(DefaultEntities.COUNTRY.value)


@pytest.mark.asyncio
async def test_existing_country_is_only_mapped(converter, context, mapping_store, logging_service):
    data = {"country_id": "US", "iso2_code": "US", "iso3_code": "USA"}

    result = await converter.convert(data, context)

    mapping = mapping_store.get(DefaultEntities.COUNTRY.value, "US")
    assert result.converted is None
    assert not result.is_rejected
    assert result.main_mapping_id == mapping.id
    assert mapping.entity_uuid == "country-us"
    assert logging_service.entries == []


@pytest.mark.asyncio
async def test_new_country_is_converted_with_translations(converter, context, mapping_store):
    data = {
        "country_id": "XK",
        "iso2_code": "xk",
        "iso3_code": "xkx",
        "translations": {
            "de_DE": {"name": "Kosovo (DE)"},
            "en_US": "Kosovo",
            "xx_XX": {"name": "unknown locale"},
        },
    }

    result = await converter.convert(data, context)
    converted = result.converted

    main_mapping = mapping_store.get(DefaultEntities.COUNTRY.value, "XK")
    assert converted["id"] == main_mapping.entity_uuid
    assert converted["iso"] == "XK"
    assert converted["iso3"] == "XKX"
    assert converted["name"] == "Kosovo (DE)"
    assert set(converted["translations"]) == {"language-de-de", "language-en-us"}
    assert converted["translations"]["language-en-us"]["name"] == "Kosovo"

    de_mapping = mapping_store.get(DefaultEntities.COUNTRY_TRANSLATION.value, "XK:de_DE")
    assert converted["translations"]["language-de-de"]["id"] == de_mapping.entity_uuid
    assert result.mapping_ids[0] == main_mapping.id
    assert len(result.mapping_ids) == 3


@pytest.mark.asyncio
async def test_new_country_name_falls_back_to_iso(converter, context):
    data = {"country_id": "XK", "iso2_code": "XK", "iso3_code": "XKX", "name": ""}

    result = await converter.convert(data, context)

    assert result.converted["name"] == "XK"
    assert "translations" not in result.converted


@pytest.mark.asyncio
async def test_missing_iso_codes_are_reported(converter, context, logging_service, mapping_store):
    data = {"country_id": "XK", "iso2_code": " ", "iso3_code": None}

    result = await converter.convert(data, context)

    assert result.is_rejected
    entry = logging_service.entries[0]
    assert isinstance(entry, EmptyNecessaryFieldRunLog)
    assert entry.empty_fields == ["iso2_code", "iso3_code"]
    assert entry.source_id == "XK"
    assert mapping_store.inserts == 0


def test_supports_every_magento_profile(converter, make_context):
    assert converter.supports(make_context("country", "magento19"))
    assert converter.supports(make_context("country", "magento21"))
    assert not converter.supports(make_context("sales_channel", "magento19"))


@pytest.mark.asyncio
async def test_country_created_earlier_is_converted_again_when_changed(
    converter, context, mapping_store, make_mapping_service, logging_service
):
    data = {"country_id": "XK", "iso2_code": "XK", "iso3_code": "XKX", "name": "Kosovo"}
    first = await converter.convert(data, context)

    next_run = CountryConverter(mapping_service=make_mapping_service(), logging_service=logging_service)
    changed = dict(data, name="Republic of Kosovo")
    second = await next_run.convert(changed, context)

    assert second.converted is not None
    assert second.converted["id"] == first.converted["id"]
    assert second.converted["name"] == "Republic of Kosovo"
    assert second.main_mapping_id == first.main_mapping_id
    assert len(mapping_store.checksum_updates) == 1


@pytest.mark.asyncio
async def test_malformed_translations_are_ignored(converter, context):
    data = {"country_id": "XK", "iso2_code": "XK", "iso3_code": "XKX", "translations": ["de_DE"]}

    result = await converter.convert(data, context)

    assert result.converted["name"] == "XK"
    assert "translations" not in result.converted
