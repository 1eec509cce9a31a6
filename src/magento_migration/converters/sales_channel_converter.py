import base64
import secrets
from typing import Any, Awaitable, Callable, Dict, List, Optional
from magento_migration.converters.base_converter import BaseConverter
from magento_migration.models.convert_struct import ConvertStruct
from magento_migration.utils.constants import (
    DefaultEntities,
    Profiles,
    FALLBACK_CUSTOMER_GROUP,
    SALES_CHANNEL_ACCESS_KEY_PREFIX,
    SALES_CHANNEL_TYPE_STOREFRONT,
)

def generate_access_key() -> str:
    random = base64.b64encode(secrets.token_bytes(16)).decode('ascii')
    return SALES_CHANNEL_ACCESS_KEY_PREFIX + random.replace('+', '').replace('/', '').rstrip('=').upper()

def as_list(value: Any) -> List[Any]:
    """Source list fields; anything that is not a list counts as empty."""
    return list(value) if isinstance(value, (list, tuple)) else []

def unique_by_id(uuids: List[str]) -> List[Dict[str, str]]:
    """Collapse repeated uuids, keeping first-seen order."""
    return [{'id': uuid} for uuid in dict.fromkeys(uuids)]

class SalesChannelConverter(BaseConverter):
    """Converts a Magento website (with its store group and stores) into a storefront sales channel."""

    entity = DefaultEntities.SALES_CHANNEL.value
    source_identifier_key = 'website_id'
    profiles = frozenset({Profiles.MAGENTO19.value})
    required_data_field_keys = (
        'website_id',
        'name',
        'carriers',
        'payments',
        'defaultCurrency',
        'defaultCountry',
        'defaultLocale',
        'store_group',
        'store_group.root_category_id',
    )

    async def convert(self, data: Dict[str, Any], context: 'MigrationContext') -> ConvertStruct: # type: ignore
        rejected = self._start(data, context)
        if rejected:
            return rejected

        self.generate_checksum(data)
        website_id = self.get_source_identifier(data)

        self.main_mapping = await self.mapping_service.get_or_create_mapping(
            self.connection_id,
            self.entity,
            website_id,
            checksum=self.checksum
        )
        converted: Dict[str, Any] = {'id': self.main_mapping.entity_uuid}

        # Stores resolve to the sales channel they belong to
        for store in as_list(data.get('stores')):
            if not isinstance(store, dict) or store.get('store_id') is None:
                continue
            mapping = await self.mapping_service.get_or_create_mapping(
                self.connection_id,
                DefaultEntities.SALES_CHANNEL_STORES.value,
                store['store_id'],
                parent_id=converted['id']
            )
            self.mapping_ids.append(mapping.id)

        # TODO: map Magento customer groups once a customer group converter exists
        converted['customerGroupId'] = FALLBACK_CUSTOMER_GROUP

        language_uuid = await self.mapping_service.get_language_uuid(self.connection_id, data['defaultLocale'])
        if language_uuid is None:
            return self.reject_missing_association(data, DefaultEntities.LANGUAGE.value, data['defaultLocale'])
        converted['languageId'] = language_uuid
        converted['languages'] = await self._collect(
            language_uuid, data.get('locales'), self._language_uuid
        )

        currency_uuid = await self.mapping_service.get_currency_uuid(self.connection_id, data['defaultCurrency'])
        if currency_uuid is None:
            return self.reject_missing_association(data, DefaultEntities.CURRENCY.value, data['defaultCurrency'])
        converted['currencyId'] = currency_uuid
        converted['currencies'] = await self._collect(
            currency_uuid, data.get('currencies'), self._currency_uuid
        )

        root_category_id = data['store_group']['root_category_id']
        category_mapping = await self.mapping_service.get_mapping(
            self.connection_id,
            DefaultEntities.CATEGORY.value,
            root_category_id
        )
        if category_mapping is None:
            return self.reject_missing_association(data, DefaultEntities.CATEGORY.value, root_category_id)
        self.mapping_ids.append(category_mapping.id)
        converted['navigationCategoryId'] = category_mapping.entity_uuid

        country_uuid = await self.mapping_service.get_country_uuid(self.connection_id, data['defaultCountry'])
        if country_uuid is None:
            return self.reject_missing_association(data, DefaultEntities.COUNTRY.value, data['defaultCountry'])
        converted['countryId'] = country_uuid
        converted['countries'] = await self._collect(
            country_uuid, data.get('countries'), self._country_uuid
        )

        converted['paymentMethods'] = await self._premapped(
            DefaultEntities.PAYMENT_METHOD.value, data['payments'], 'payment_id'
        )
        if not converted['paymentMethods']:
            return self.reject_missing_association(
                data, DefaultEntities.PAYMENT_METHOD.value, self._joined_ids(data['payments'], 'payment_id')
            )
        converted['paymentMethodId'] = converted['paymentMethods'][0]['id']

        converted['shippingMethods'] = await self._premapped(
            DefaultEntities.SHIPPING_METHOD.value, data['carriers'], 'carrier_id'
        )
        if not converted['shippingMethods']:
            return self.reject_missing_association(
                data, DefaultEntities.SHIPPING_METHOD.value, self._joined_ids(data['carriers'], 'carrier_id')
            )
        converted['shippingMethodId'] = converted['shippingMethods'][0]['id']

        await self._add_translation(converted, data, language_uuid)

        converted['typeId'] = SALES_CHANNEL_TYPE_STOREFRONT
        converted['accessKey'] = generate_access_key()
        self.convert_value(converted, 'name', data, 'name')

        await self.update_main_mapping()

        return self._result(converted, data)

    async def _language_uuid(self, locale: str) -> Optional[str]:
        return await self.mapping_service.get_language_uuid(self.connection_id, locale)

    async def _currency_uuid(self, iso_code: str) -> Optional[str]:
        return await self.mapping_service.get_currency_uuid(self.connection_id, iso_code)

    async def _country_uuid(self, iso: str) -> Optional[str]:
        return await self.mapping_service.get_country_uuid(self.connection_id, iso)

    async def _collect(
        self,
        default_uuid: str,
        identifiers: Optional[List[str]],
        resolve: Callable[[str], Awaitable[Optional[str]]]
    ) -> List[Dict[str, str]]:
        """Default first, then every resolvable extra. Unresolvable extras are skipped."""
        uuids = [default_uuid]
        for identifier in as_list(identifiers):
            uuid = await resolve(identifier)
            if uuid is not None:
                uuids.append(uuid)
        return unique_by_id(uuids)

    async def _premapped(self, entity: str, items: List[Dict[str, Any]], id_key: str) -> List[Dict[str, str]]:
        uuids = []
        for item in as_list(items):
            if not isinstance(item, dict) or id_key not in item:
                continue
            mapping = await self.mapping_service.get_mapping(self.connection_id, entity, item[id_key])
            if mapping is None:
                continue
            uuids.append(mapping.entity_uuid)
        return unique_by_id(uuids)

    @staticmethod
    def _joined_ids(items: List[Dict[str, Any]], id_key: str) -> str:
        return ','.join(str(item[id_key]) for item in as_list(items) if isinstance(item, dict) and id_key in item)

    async def _add_translation(self, converted: Dict[str, Any], data: Dict[str, Any], language_uuid: str) -> None:
        if await self.mapping_service.is_default_locale(data['defaultLocale']):
            return

        translation: Dict[str, Any] = {}
        self.convert_value(translation, 'name', data, 'name')

        mapping = await self.mapping_service.get_or_create_mapping(
            self.connection_id,
            DefaultEntities.SALES_CHANNEL_TRANSLATION.value,
            f"{self.get_source_identifier(data)}:{data['defaultLocale']}"
        )
        self.mapping_ids.append(mapping.id)
        translation['id'] = mapping.entity_uuid
        translation['languageId'] = language_uuid

        converted['translations'] = {language_uuid: translation}

class Magento21SalesChannelConverter(SalesChannelConverter):
    profiles = frozenset({Profiles.MAGENTO21.value})
