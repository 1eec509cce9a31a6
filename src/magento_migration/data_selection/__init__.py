from .data_set import (
    DataSet,
    SalesChannelDataSet,
    CountryDataSet,
    OrderDataSet,
    NewsletterRecipientDataSet,
    ManufacturerDataSet,
    PropertyGroupDataSet,
    ProductCustomFieldDataSet,
    ProductDataSet,
    DATA_SETS,
)
from .data_selection import (
    DataSelectionStruct,
    ProductDataSelection,
    DATA_SELECTIONS,
    get_data_selections,
)

__all__ = [
    'DataSet',
    'SalesChannelDataSet',
    'CountryDataSet',
    'OrderDataSet',
    'NewsletterRecipientDataSet',
    'ManufacturerDataSet',
    'PropertyGroupDataSet',
    'ProductCustomFieldDataSet',
    'ProductDataSet',
    'DATA_SETS',
    'DataSelectionStruct',
    'ProductDataSelection',
    'DATA_SELECTIONS',
    'get_data_selections',
]
