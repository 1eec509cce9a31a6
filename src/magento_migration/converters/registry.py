from typing import Any, Dict, List, Sequence, Type
from magento_migration.converters.base_converter import BaseConverter
from magento_migration.converters.country_converter import CountryConverter
from magento_migration.converters.newsletter_recipient_converter import (
    NewsletterRecipientConverter,
    Magento21NewsletterRecipientConverter,
)
from magento_migration.converters.sales_channel_converter import (
    SalesChannelConverter,
    Magento21SalesChannelConverter,
)
from magento_migration.models.convert_struct import ConvertStruct
from magento_migration.utils.exceptions import BusinessError, ConverterNotFoundError

CONVERTER_CLASSES: Sequence[Type[BaseConverter]] = (
    SalesChannelConverter,
    Magento21SalesChannelConverter,
    CountryConverter,
    NewsletterRecipientConverter,
    Magento21NewsletterRecipientConverter,
)

class ConverterRegistry:
    """Dispatches raw records to the converter supporting the migration context."""

    def __init__(self, converters: Sequence[BaseConverter], logger: 'CustomLogger'): # type: ignore
        self.converters = list(converters)
        self.logger = logger

    def get_converter(self, context: 'MigrationContext') -> BaseConverter: # type: ignore
        for converter in self.converters:
            if converter.supports(context):
                return converter

        raise ConverterNotFoundError(
            f"No converter supports {context.entity} for profile {context.profile_name}",
            context={'entity': context.entity, 'profile': context.profile_name}
        )

    async def convert(self, data: Dict[str, Any], context: 'MigrationContext') -> ConvertStruct: # type: ignore
        return await self.get_converter(context).convert(data, context)

    async def convert_batch(self, records: List[Dict[str, Any]], context: 'MigrationContext') -> List[ConvertStruct]: # type: ignore
        """Convert records one after another. Rejected records stay in the result list."""
        converter = self.get_converter(context)
        results = []
        for record in records:
            results.append(await converter.convert(record, context))

        rejected = sum(1 for result in results if result.is_rejected)
        self.logger.info(
            f"{converter.name} converted {len(results) - rejected}/{len(results)} "
            f"{context.entity} records for run {context.run_id}"
        )
        return results

def build_registry(
    mapping_service: 'MappingService', # type: ignore
    logging_service: 'LoggingService', # type: ignore
    logger: 'CustomLogger', # type: ignore
) -> ConverterRegistry:
    """Instantiate every converter with the shared services."""
    converter_params = {
        'mapping_service': mapping_service,
        'logging_service': logging_service,
    }

    converters = []
    for converter_class in CONVERTER_CLASSES:
        try:
            converters.append(converter_class(**converter_params))
            logger.debug(f"Successfully initialized {converter_class.__name__}")
        except ValueError as e:
            raise BusinessError(f"Failed to initialize {converter_class.__name__}: {str(e)}")

    return ConverterRegistry(converters, logger)
