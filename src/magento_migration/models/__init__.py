from .mapping import EntityMapping, MappingKey
from .convert_struct import ConvertStruct
from .context import MigrationContext
from .logs import LogEntry, EmptyNecessaryFieldRunLog, AssociationRequiredMissingLog
from .reference import (
    ReferenceEntity,
    Country,
    Currency,
    Language,
    Tax,
    StateMachine,
    StateMachineState,
)

__all__ = [
    'EntityMapping',
    'MappingKey',
    'ConvertStruct',
    'MigrationContext',
    'LogEntry',
    'EmptyNecessaryFieldRunLog',
    'AssociationRequiredMissingLog',
    'ReferenceEntity',
    'Country',
    'Currency',
    'Language',
    'Tax',
    'StateMachine',
    'StateMachineState',
]
