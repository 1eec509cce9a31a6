from typing import Any, List, Optional, Protocol
from magento_migration.models.mapping import EntityMapping
from magento_migration.models.logs import LogEntry

class MappingStore(Protocol):
    """Persistent mapping table."""

    async def find(self, connection_id: str, entity: str, old_identifier: str) -> Optional[EntityMapping]:
        ...

    async def find_by_entity(self, connection_id: str, entity: str) -> List[EntityMapping]:
        ...

    async def insert_if_absent(self, mapping: EntityMapping) -> EntityMapping:
        """Insert the mapping unless its key exists. Returns the stored row."""
        ...

    async def update_checksum(self, mapping_id: str, checksum: str) -> None:
        ...

class ReferenceStore(Protocol):
    """Read access to one target-system reference table."""

    async def find_by_natural_key(self, key: Any) -> Optional[Any]:
        ...

    async def find_by_id(self, id: str) -> Optional[Any]:
        ...

class LogSink(Protocol):
    def add_log_entry(self, entry: LogEntry) -> None:
        ...
