from typing import ClassVar, FrozenSet
from magento_migration.utils.constants import DefaultEntities, Profiles, MAGENTO_PROFILES

class DataSet:
    """An entity type that can be read from a Magento source."""

    entity: ClassVar[str]
    profiles: ClassVar[FrozenSet[str]] = MAGENTO_PROFILES

    def supports(self, context: 'MigrationContext') -> bool: # type: ignore
        return context.profile_name in self.profiles

class SalesChannelDataSet(DataSet):
    entity = DefaultEntities.SALES_CHANNEL.value

class CountryDataSet(DataSet):
    entity = DefaultEntities.COUNTRY.value
    profiles = frozenset({Profiles.MAGENTO19.value})

class OrderDataSet(DataSet):
    entity = DefaultEntities.ORDER.value
    profiles = frozenset({Profiles.MAGENTO19.value})

class NewsletterRecipientDataSet(DataSet):
    entity = DefaultEntities.NEWSLETTER_RECIPIENT.value

class ManufacturerDataSet(DataSet):
    entity = DefaultEntities.PRODUCT_MANUFACTURER.value

class PropertyGroupDataSet(DataSet):
    entity = DefaultEntities.PROPERTY_GROUP.value

class ProductCustomFieldDataSet(DataSet):
    entity = DefaultEntities.PRODUCT_CUSTOM_FIELD.value

class ProductDataSet(DataSet):
    entity = DefaultEntities.PRODUCT.value

DATA_SETS = {
    data_set.entity: data_set
    for data_set in (
        SalesChannelDataSet,
        CountryDataSet,
        OrderDataSet,
        NewsletterRecipientDataSet,
        ManufacturerDataSet,
        PropertyGroupDataSet,
        ProductCustomFieldDataSet,
        ProductDataSet,
    )
}
