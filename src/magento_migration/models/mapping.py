# models/mapping.py
from datetime import datetime
from typing import Any, Dict, NamedTuple, Optional
from pydantic import BaseModel, ConfigDict

class MappingKey(NamedTuple):
    """Cache key of a mapping. One mapping row exists per key."""
    connection_id: str
    entity: str
    old_identifier: str

class EntityMapping(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    connection_id: str
    entity: str
    old_identifier: str
    entity_uuid: Optional[str] = None
    entity_value: Optional[str] = None
    checksum: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @property
    def key(self) -> MappingKey:
        return MappingKey(self.connection_id, self.entity, self.old_identifier)
