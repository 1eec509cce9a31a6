#constants.py
from enum import Enum

class DefaultEntities(Enum):
    SALES_CHANNEL = 'sales_channel'
    SALES_CHANNEL_TRANSLATION = 'sales_channel_translation'
    SALES_CHANNEL_STORES = 'sales_channel_stores'
    CATEGORY = 'category'
    ROOT_CATEGORY = 'root_category'
    COUNTRY = 'country'
    COUNTRY_TRANSLATION = 'country_translation'
    CURRENCY = 'currency'
    LANGUAGE = 'language'
    TAX = 'tax'
    NEWSLETTER_RECIPIENT = 'newsletter_recipient'
    ORDER = 'order'
    PAYMENT_METHOD = 'payment_method'
    SHIPPING_METHOD = 'shipping_method'
    PRODUCT = 'product'
    PRODUCT_MANUFACTURER = 'product_manufacturer'
    PROPERTY_GROUP = 'property_group'
    PRODUCT_CUSTOM_FIELD = 'product_custom_field'

class Profiles(Enum):
    MAGENTO19 = 'magento19'
    MAGENTO21 = 'magento21'

MAGENTO_PROFILES = frozenset(profile.value for profile in Profiles)

class LogLevel(Enum):
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'

# Target system fixed ids
FALLBACK_CUSTOMER_GROUP = 'cfbd5018d38d41d8adca10d94fc8bdd6'
SALES_CHANNEL_TYPE_STOREFRONT = '8a243080f92e4c719546314b577cf82b'
ORDER_TRANSACTION_STATE_MACHINE = 'order_transaction.state'

SALES_CHANNEL_ACCESS_KEY_PREFIX = 'SWSC'

# Magento subscriber_status -> target newsletter status
NEWSLETTER_STATUS = {
    '1': 'optIn',
    '2': 'notSet',
    '3': 'optOut',
    '4': 'direct',
}
DEFAULT_NEWSLETTER_STATUS = 'notSet'
