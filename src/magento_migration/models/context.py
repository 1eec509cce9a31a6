from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from magento_migration.data_selection.data_set import DataSet

@dataclass(frozen=True)
class MigrationContext:
    """Run-scoped information handed to converters. Read only."""
    connection_id: str
    run_id: str
    profile_name: str
    data_set: 'DataSet'

    @property
    def entity(self) -> str:
        return self.data_set.entity
