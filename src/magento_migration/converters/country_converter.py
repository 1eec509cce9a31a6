from typing import Any, Dict
from magento_migration.converters.base_converter import BaseConverter
from magento_migration.models.convert_struct import ConvertStruct
from magento_migration.utils.constants import DefaultEntities

class CountryConverter(BaseConverter):
    """
    Converts a Magento directory country.

    A country the target already knows by ISO code is only mapped, not
    written again: the result then has no converted record but does carry
    the mapping id.
    """

    entity = DefaultEntities.COUNTRY.value
    source_identifier_key = 'country_id'
    required_data_field_keys = ('country_id', 'iso2_code', 'iso3_code')

    async def convert(self, data: Dict[str, Any], context: 'MigrationContext') -> ConvertStruct: # type: ignore
        rejected = self._start(data, context)
        if rejected:
            return rejected

        self.generate_checksum(data)
        iso = str(data['iso2_code']).upper()

        # Mappings from earlier runs of this converter do not count as existing
        target_country = await self.mapping_service.find_target_country(iso)
        if target_country is not None:
            await self.mapping_service.get_country_uuid(self.connection_id, iso)
            self.main_mapping = await self.mapping_service.get_mapping(
                self.connection_id, self.entity, iso
            )
            await self.update_main_mapping()
            return self._result(None, data)

        self.main_mapping = await self.mapping_service.get_or_create_mapping(
            self.connection_id,
            self.entity,
            iso,
            checksum=self.checksum
        )

        converted: Dict[str, Any] = {
            'id': self.main_mapping.entity_uuid,
            'iso': iso,
            'iso3': str(data['iso3_code']).upper(),
        }
        self.convert_value(converted, 'name', data, 'name')

        translations: Dict[str, Dict[str, Any]] = {}
        source_translations = data.get('translations')
        if not isinstance(source_translations, dict):
            source_translations = {}
        for locale, values in source_translations.items():
            language_uuid = await self.mapping_service.get_language_uuid(self.connection_id, locale)
            if language_uuid is None or language_uuid in translations:
                continue

            mapping = await self.mapping_service.get_or_create_mapping(
                self.connection_id,
                DefaultEntities.COUNTRY_TRANSLATION.value,
                f"{self.get_source_identifier(data)}:{locale}"
            )
            self.mapping_ids.append(mapping.id)

            if not isinstance(values, dict):
                values = {'name': values}
            translation: Dict[str, Any] = {'id': mapping.entity_uuid, 'languageId': language_uuid}
            self.convert_value(translation, 'name', values, 'name')
            translations[language_uuid] = translation

        if translations:
            converted['translations'] = translations
        if 'name' not in converted:
            converted['name'] = next(
                (t['name'] for t in translations.values() if 'name' in t),
                iso
            )

        await self.update_main_mapping()

        return self._result(converted, data)
