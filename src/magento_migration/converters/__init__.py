from .base_converter import BaseConverter
from .sales_channel_converter import SalesChannelConverter, Magento21SalesChannelConverter
from .country_converter import CountryConverter
from .newsletter_recipient_converter import (
    NewsletterRecipientConverter,
    Magento21NewsletterRecipientConverter,
)
from .registry import ConverterRegistry, build_registry, CONVERTER_CLASSES

__all__ = [
    'BaseConverter',
    'SalesChannelConverter',
    'Magento21SalesChannelConverter',
    'CountryConverter',
    'NewsletterRecipientConverter',
    'Magento21NewsletterRecipientConverter',
    'ConverterRegistry',
    'build_registry',
    'CONVERTER_CLASSES',
]
