# models/logs.py
from typing import Any, Dict, List
from pydantic import BaseModel
from magento_migration.utils.constants import LogLevel

class LogEntry(BaseModel):
    """Structured entry recorded against a migration run."""
    run_id: str

    @property
    def level(self) -> str:
        return LogLevel.WARNING.value

    @property
    def code(self) -> str:
        raise NotImplementedError

    @property
    def title(self) -> str:
        raise NotImplementedError

    @property
    def description(self) -> str:
        raise NotImplementedError

    def get_parameters(self) -> Dict[str, Any]:
        return self.model_dump(exclude={'run_id'})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'level': self.level,
            'code': self.code,
            'title': self.title,
            'description': self.description,
            'parameters': self.get_parameters(),
        }

class EmptyNecessaryFieldRunLog(LogEntry):
    """One or more required source fields are absent or empty."""
    entity: str
    source_id: str
    empty_fields: List[str]

    @property
    def code(self) -> str:
        return f"SWAG_MIGRATION_EMPTY_NECESSARY_FIELD_{self.entity.upper()}"

    @property
    def title(self) -> str:
        return f"The {self.entity} entity has one or more empty necessary fields"

    @property
    def description(self) -> str:
        return (
            f"The {self.entity} entity with the source id {self.source_id} can not be converted "
            f"because of empty necessary field(s): {', '.join(self.empty_fields)}."
        )

class AssociationRequiredMissingLog(LogEntry):
    """A mandatory cross-reference could not be resolved."""
    missing_entity: str
    missing_key: str
    required_for: str

    @property
    def code(self) -> str:
        return f"SWAG_MIGRATION_ASSOCIATION_REQUIRED_MISSING_{self.missing_entity.upper()}"

    @property
    def title(self) -> str:
        return f"Associated {self.missing_entity} not found"

    @property
    def description(self) -> str:
        return (
            f'The {self.missing_entity} with the source id "{self.missing_key}" '
            f"can not be found but is required for {self.required_for}."
        )
