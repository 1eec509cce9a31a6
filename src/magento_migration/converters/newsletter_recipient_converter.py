from typing import Any, Dict
from uuid import uuid4
from magento_migration.converters.base_converter import BaseConverter, to_datetime
from magento_migration.models.convert_struct import ConvertStruct
from magento_migration.utils.constants import (
    DefaultEntities,
    Profiles,
    NEWSLETTER_STATUS,
    DEFAULT_NEWSLETTER_STATUS,
)

class NewsletterRecipientConverter(BaseConverter):
    entity = DefaultEntities.NEWSLETTER_RECIPIENT.value
    source_identifier_key = 'subscriber_id'
    profiles = frozenset({Profiles.MAGENTO19.value})
    required_data_field_keys = ('subscriber_id', 'subscriber_email', 'store_id')

    async def convert(self, data: Dict[str, Any], context: 'MigrationContext') -> ConvertStruct: # type: ignore
        rejected = self._start(data, context)
        if rejected:
            return rejected

        self.generate_checksum(data)

        self.main_mapping = await self.mapping_service.get_or_create_mapping(
            self.connection_id,
            self.entity,
            self.get_source_identifier(data),
            checksum=self.checksum
        )
        converted: Dict[str, Any] = {'id': self.main_mapping.entity_uuid}

        store_mapping = await self.mapping_service.get_mapping(
            self.connection_id,
            DefaultEntities.SALES_CHANNEL_STORES.value,
            data['store_id']
        )
        if store_mapping is None:
            return self.reject_missing_association(data, DefaultEntities.SALES_CHANNEL.value, data['store_id'])
        self.mapping_ids.append(store_mapping.id)
        converted['salesChannelId'] = store_mapping.entity_uuid

        locale = data.get('locale')
        language_uuid = await self.mapping_service.get_language_uuid(self.connection_id, locale)
        if language_uuid is None:
            return self.reject_missing_association(data, DefaultEntities.LANGUAGE.value, locale or '')
        converted['languageId'] = language_uuid

        self.convert_value(converted, 'email', data, 'subscriber_email')
        self.convert_value(converted, 'firstName', data, 'customer_firstname')
        self.convert_value(converted, 'lastName', data, 'customer_lastname')
        self.convert_value(converted, 'updatedAt', data, 'change_status_at', to_datetime)
        converted['status'] = NEWSLETTER_STATUS.get(
            str(data.get('subscriber_status')), DEFAULT_NEWSLETTER_STATUS
        )
        converted['hash'] = uuid4().hex

        await self.update_main_mapping()

        return self._result(converted, data)

class Magento21NewsletterRecipientConverter(NewsletterRecipientConverter):
    profiles = frozenset({Profiles.MAGENTO21.value})
