from .mapping_service import MappingService, normalize_locale
from .logging_service import LoggingService
from .factory import create_mapping_service

__all__ = [
    'MappingService',
    'normalize_locale',
    'LoggingService',
    'create_mapping_service',
]
