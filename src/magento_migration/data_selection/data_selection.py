from dataclasses import dataclass, field
from typing import List
from magento_migration.data_selection.data_set import (
    ManufacturerDataSet,
    ProductCustomFieldDataSet,
    ProductDataSet,
    PropertyGroupDataSet,
)
from magento_migration.utils.constants import MAGENTO_PROFILES

@dataclass(frozen=True)
class DataSelectionStruct:
    identifier: str
    entity_names: List[str] = field(default_factory=list)
    entity_names_required_for_count: List[str] = field(default_factory=list)
    snippet: str = ''
    position: int = 0
    process_media_files: bool = False

class ProductDataSelection:
    """Products together with the entities they reference, in write order."""

    IDENTIFIER = 'products'

    def supports(self, profile_name: str) -> bool:
        return profile_name in MAGENTO_PROFILES

    def get_data(self) -> DataSelectionStruct:
        return DataSelectionStruct(
            identifier=self.IDENTIFIER,
            entity_names=self.get_entity_names(),
            entity_names_required_for_count=self.get_entity_names_required_for_count(),
            snippet='swag-migration.index.selectDataCard.dataSelection.products',
            position=100,
            process_media_files=True,
        )

    def get_entity_names(self) -> List[str]:
        return [
            ManufacturerDataSet.entity,
            PropertyGroupDataSet.entity,
            ProductCustomFieldDataSet.entity,
            ProductDataSet.entity,
        ]

    def get_entity_names_required_for_count(self) -> List[str]:
        return [ProductDataSet.entity]

DATA_SELECTIONS = (ProductDataSelection(),)

def get_data_selections(profile_name: str) -> List[DataSelectionStruct]:
    """Selections offered for a profile, ordered by position."""
    selections = [selection.get_data() for selection in DATA_SELECTIONS if selection.supports(profile_name)]
    return sorted(selections, key=lambda data: data.position)
