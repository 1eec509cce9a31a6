from .base import MappingStore, ReferenceStore, LogSink
from .mapping import MappingRepository
from .reference import (
    ReferenceRepository,
    CountryRepository,
    CurrencyRepository,
    LanguageRepository,
    TaxRepository,
    StateMachineRepository,
    StateMachineStateRepository,
)

__all__ = [
    'MappingStore',
    'ReferenceStore',
    'LogSink',
    'MappingRepository',
    'ReferenceRepository',
    'CountryRepository',
    'CurrencyRepository',
    'LanguageRepository',
    'TaxRepository',
    'StateMachineRepository',
    'StateMachineStateRepository',
]
