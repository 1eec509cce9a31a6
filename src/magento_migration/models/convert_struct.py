from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

@dataclass
class ConvertStruct:
    """
    Result of converting one raw record.

    ``converted`` is None when the record was rejected, or when the target
    already holds the entity and only the mapping was recorded; the latter
    case carries a ``main_mapping_id``.
    """
    converted: Optional[Dict[str, Any]]
    unconverted: Dict[str, Any]
    main_mapping_id: Optional[str] = None
    mapping_ids: List[str] = field(default_factory=list)

    @property
    def is_rejected(self) -> bool:
        return self.converted is None and self.main_mapping_id is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'converted': self.converted,
            'unconverted': self.unconverted,
            'main_mapping_id': self.main_mapping_id,
            'mapping_ids': self.mapping_ids,
        }
