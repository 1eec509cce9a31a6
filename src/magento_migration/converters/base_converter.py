import json
import hashlib
from datetime import datetime
from typing import Any, Callable, ClassVar, Dict, FrozenSet, List, Optional, Sequence
from magento_migration.models.convert_struct import ConvertStruct
from magento_migration.models.logs import AssociationRequiredMissingLog, EmptyNecessaryFieldRunLog
from magento_migration.utils.constants import MAGENTO_PROFILES

MISSING = object()

def get_path(data: Dict[str, Any], path: str) -> Any:
    """Read a dotted path such as ``store_group.root_category_id``."""
    value: Any = data
    for part in path.split('.'):
        if not isinstance(value, dict) or part not in value:
            return MISSING
        value = value[part]
    return value

def is_empty(value: Any) -> bool:
    if value is MISSING or value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False

def to_datetime(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    try:
        return datetime.fromisoformat(str(value)).isoformat()
    except ValueError:
        return None

class BaseConverter:
    """
    Base class for converting one raw Magento record into a target record.

    A converter keeps the state of the record it is converting (connection,
    run, main mapping, touched mapping ids); the state is reset at the start
    of every conversion, so one instance converts one record at a time.
    """

    REQUIRED_DEPENDENCIES = {
        'mapping_service': 'Mapping service',
        'logging_service': 'Run logging service',
    }

    entity: ClassVar[str]
    source_identifier_key: ClassVar[str]
    profiles: ClassVar[FrozenSet[str]] = MAGENTO_PROFILES
    required_data_field_keys: ClassVar[Sequence[str]] = ()

    def __init__(self, **kwargs):
        """Initialize converter with its dependencies."""
        self._validate_dependencies(kwargs)
        for key, value in kwargs.items():
            setattr(self, key, value)
        self._reset_state()

    def _validate_dependencies(self, dependencies: dict) -> None:
        """Validate that all required dependencies are provided."""
        missing_deps = [dep for dep in self.REQUIRED_DEPENDENCIES if dependencies.get(dep) is None]
        if missing_deps:
            missing_desc = [f"- {dep}: {self.REQUIRED_DEPENDENCIES[dep]}" for dep in missing_deps]
            raise ValueError("Missing required dependencies:\n" + "\n".join(missing_desc))

    def _reset_state(self, context: Optional['MigrationContext'] = None) -> None: # type: ignore
        self.connection_id: Optional[str] = context.connection_id if context else None
        self.run_id: Optional[str] = context.run_id if context else None
        self.main_mapping = None
        self.mapping_ids: List[str] = []
        self.checksum: Optional[str] = None

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def supports(self, context: 'MigrationContext') -> bool: # type: ignore
        return context.profile_name in self.profiles and context.entity == self.entity

    def get_source_identifier(self, data: Dict[str, Any]) -> str:
        value = data.get(self.source_identifier_key)
        return '' if value is None else str(value)

    async def convert(self, data: Dict[str, Any], context: 'MigrationContext') -> ConvertStruct: # type: ignore
        raise NotImplementedError("Subclasses must implement convert method")

    def check_for_empty_required_fields(self, data: Dict[str, Any], keys: Sequence[str]) -> List[str]:
        """Return the names of all required fields that are absent or empty."""
        return [key.split('.')[-1] for key in keys if is_empty(get_path(data, key))]

    def generate_checksum(self, data: Dict[str, Any]) -> str:
        payload = json.dumps(data, sort_keys=True, default=str, ensure_ascii=False)
        self.checksum = hashlib.md5(payload.encode('utf-8')).hexdigest()
        return self.checksum

    async def update_main_mapping(self) -> None:
        """Store the checksum of the converted record on its main mapping."""
        if self.main_mapping is None:
            return
        self.main_mapping = await self.mapping_service.update_checksum(self.main_mapping, self.checksum)

    def convert_value(
        self,
        new_data: Dict[str, Any],
        new_key: str,
        source: Dict[str, Any],
        source_key: str,
        cast: Callable[[Any], Any] = str,
    ) -> None:
        """Copy ``source[source_key]`` into ``new_data[new_key]`` when present and non-empty."""
        value = source.get(source_key)
        if is_empty(value):
            return
        converted = cast(value)
        if converted is not None:
            new_data[new_key] = converted

    def reject_empty_fields(self, data: Dict[str, Any], fields: List[str]) -> ConvertStruct:
        self.logging_service.add_log_entry(EmptyNecessaryFieldRunLog(
            run_id=self.run_id,
            entity=self.entity,
            source_id=self.get_source_identifier(data),
            empty_fields=fields,
        ))
        return ConvertStruct(None, data)

    def reject_missing_association(self, data: Dict[str, Any], missing_entity: str, missing_key: Any) -> ConvertStruct:
        self.logging_service.add_log_entry(AssociationRequiredMissingLog(
            run_id=self.run_id,
            missing_entity=missing_entity,
            missing_key=str(missing_key),
            required_for=self.entity,
        ))
        return ConvertStruct(None, data)

    def _start(self, data: Dict[str, Any], context: 'MigrationContext') -> Optional[ConvertStruct]: # type: ignore
        """Reset state and check required fields. Returns a rejection or None."""
        self._reset_state(context)
        fields = self.check_for_empty_required_fields(data, self.required_data_field_keys)
        if fields:
            return self.reject_empty_fields(data, fields)
        return None

    def _result(self, converted: Optional[Dict[str, Any]], data: Dict[str, Any]) -> ConvertStruct:
        main_mapping_id = self.main_mapping.id if self.main_mapping else None
        mapping_ids = ([main_mapping_id] if main_mapping_id else []) + self.mapping_ids
        return ConvertStruct(converted, data, main_mapping_id, mapping_ids)
