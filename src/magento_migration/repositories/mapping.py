from typing import List, Optional
from magento_migration.models.mapping import EntityMapping

MAPPING_COLUMNS = """
    id, connection_id, entity, old_identifier, entity_uuid,
    entity_value, checksum, additional_data, created_at
"""

class MappingRepository:
    def __init__(self, db: 'Database'): # type: ignore
        self.db = db

    async def find(self, connection_id: str, entity: str, old_identifier: str) -> Optional[EntityMapping]:
        query = f"""
            SELECT {MAPPING_COLUMNS}
            FROM swag_migration_mapping
            WHERE connection_id = $1 AND entity = $2 AND old_identifier = $3
            LIMIT 1
        """
        record = await self.db.fetchrow(query, connection_id, entity, old_identifier)
        return EntityMapping.model_validate(record) if record else None

    async def find_by_entity(self, connection_id: str, entity: str) -> List[EntityMapping]:
        query = f"""
            SELECT {MAPPING_COLUMNS}
            FROM swag_migration_mapping
            WHERE connection_id = $1 AND entity = $2
        """
        rows = await self.db.fetch(query, connection_id, entity)
        return [EntityMapping.model_validate(row) for row in rows]

    async def insert_if_absent(self, mapping: EntityMapping) -> EntityMapping:
        """
        Insert a mapping, keeping the existing row when the key is taken.

        The unique key makes concurrent inserts for the same
        (connection, entity, old identifier) resolve to a single row.
        """
        query = f"""
            INSERT INTO swag_migration_mapping
                (id, connection_id, entity, old_identifier, entity_uuid,
                 entity_value, checksum, additional_data)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            ON CONFLICT (connection_id, entity, old_identifier) DO NOTHING
            RETURNING {MAPPING_COLUMNS}
        """
        record = await self.db.fetchrow(
            query,
            mapping.id,
            mapping.connection_id,
            mapping.entity,
            mapping.old_identifier,
            mapping.entity_uuid,
            mapping.entity_value,
            mapping.checksum,
            mapping.additional_data,
        )
        if record:
            return EntityMapping.model_validate(record)

        return await self.find(mapping.connection_id, mapping.entity, mapping.old_identifier)

    async def update_checksum(self, mapping_id: str, checksum: str) -> None:
        query = """
            UPDATE swag_migration_mapping
            SET checksum = $2, updated_at = CURRENT_TIMESTAMP
            WHERE id = $1
        """
        await self.db.execute(query, mapping_id, checksum)
