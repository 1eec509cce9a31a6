import os
import tempfile
from decimal import Decimal

# Config is read at import time
os.environ.setdefault("APP_ROOT", tempfile.mkdtemp(prefix="magento_migration_"))
os.environ.setdefault("DB_PASSWORD", "test-password")
os.environ.setdefault("API_TOKEN", "test-token")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from magento_migration.config import config
from magento_migration.data_selection import DATA_SETS
from magento_migration.models import (
    Country,
    Currency,
    EntityMapping,
    Language,
    MappingKey,
    MigrationContext,
    StateMachine,
    StateMachineState,
    Tax,
)
from magento_migration.services import LoggingService, MappingService
from magento_migration.utils.constants import ORDER_TRANSACTION_STATE_MACHINE
from magento_migration.utils.logger import logger

CONNECTION_ID = "connection-1"
RUN_ID = "run-1"


class FakeMappingStore:
    """In-memory mapping table with the same insert-or-return semantics as the SQL one."""

    def __init__(self):
        self.rows: Dict[MappingKey, EntityMapping] = {}
        self.find_calls = 0
        self.find_by_entity_calls = 0
        self.inserts = 0
        self.checksum_updates: List[tuple] = []

    def seed(self, entity: str, old_identifier: str, entity_uuid: str, connection_id: str = CONNECTION_ID) -> EntityMapping:
        mapping = EntityMapping(
            id=f"mapping-{entity}-{old_identifier}",
            connection_id=connection_id,
            entity=entity,
            old_identifier=old_identifier,
            entity_uuid=entity_uuid,
        )
        self.rows[mapping.key] = mapping
        return mapping

    def get(self, entity: str, old_identifier: str, connection_id: str = CONNECTION_ID) -> Optional[EntityMapping]:
        return self.rows.get(MappingKey(connection_id, entity, old_identifier))

    async def find(self, connection_id: str, entity: str, old_identifier: str) -> Optional[EntityMapping]:
        self.find_calls += 1
        await asyncio.sleep(0)
        return self.rows.get(MappingKey(connection_id, entity, old_identifier))

    async def find_by_entity(self, connection_id: str, entity: str) -> List[EntityMapping]:
        self.find_by_entity_calls += 1
        return [
            mapping for key, mapping in self.rows.items()
            if key.connection_id == connection_id and key.entity == entity
        ]

    async def insert_if_absent(self, mapping: EntityMapping) -> EntityMapping:
        await asyncio.sleep(0)
        existing = self.rows.get(mapping.key)
        if existing is not None:
            return existing
        self.inserts += 1
        self.rows[mapping.key] = mapping
        return mapping

    async def update_checksum(self, mapping_id: str, checksum: str) -> None:
        self.checksum_updates.append((mapping_id, checksum))
        for key, mapping in self.rows.items():
            if mapping.id == mapping_id:
                self.rows[key] = mapping.model_copy(update={"checksum": checksum})


class FakeReferenceStore:
    def __init__(self, rows: Optional[Dict[Any, Any]] = None):
        self.rows = rows or {}
        self.natural_key_calls: List[Any] = []

    async def find_by_natural_key(self, key: Any):
        self.natural_key_calls.append(key)
        return self.rows.get(key)

    async def find_by_id(self, id: str):
        for entity in self.rows.values():
            if entity.id == id:
                return entity
        return None


class FakeDatabase:
    def __init__(self):
        self.batches: List[tuple] = []

    async def execute_many(self, query: str, args_list: List[tuple]) -> None:
        self.batches.append((query, list(args_list)))

    async def health_check(self) -> bool:
        return True


def build_reference_stores() -> Dict[str, FakeReferenceStore]:
    return {
        "countries": FakeReferenceStore({
            "US": Country(id="country-us", iso="US", iso3="USA"),
            "DE": Country(id="country-de", iso="DE", iso3="DEU"),
        }),
        "currencies": FakeReferenceStore({
            "USD": Currency(id="currency-usd", iso_code="USD"),
            "EUR": Currency(id="currency-eur", iso_code="EUR"),
        }),
        "languages": FakeReferenceStore({
            "en-GB": Language(id=config.SYSTEM_LANGUAGE_ID, locale_code="en-GB"),
            "en-US": Language(id="language-en-us", locale_code="en-US"),
            "de-DE": Language(id="language-de-de", locale_code="de-DE"),
        }),
        "taxes": FakeReferenceStore({
            "19": Tax(id="tax-19", tax_rate=Decimal("19.00")),
            "7": Tax(id="tax-7", tax_rate=Decimal("7.00")),
        }),
        "state_machines": FakeReferenceStore({
            ORDER_TRANSACTION_STATE_MACHINE: StateMachine(
                id="state-machine-transaction", technical_name=ORDER_TRANSACTION_STATE_MACHINE
            ),
        }),
        "state_machine_states": FakeReferenceStore({
            ("state-machine-transaction", "paid"): StateMachineState(
                id="state-paid", state_machine_id="state-machine-transaction", technical_name="paid"
            ),
            ("state-machine-transaction", "open"): StateMachineState(
                id="state-open", state_machine_id="state-machine-transaction", technical_name="open"
            ),
        }),
    }


@pytest.fixture
def mapping_store():
    return FakeMappingStore()


@pytest.fixture
def reference_stores():
    return build_reference_stores()


@pytest.fixture
def make_mapping_service(mapping_store, reference_stores):
    """Factory for services sharing one mapping table, as parallel workers would."""

    def factory(**overrides) -> MappingService:
        stores = dict(reference_stores, **overrides)
        return MappingService(
            mapping_store=mapping_store,
            config=config,
            logger=logger,
            **stores,
        )

    return factory


@pytest.fixture
def mapping_service(make_mapping_service):
    return make_mapping_service()


@pytest.fixture
def logging_service():
    return LoggingService(logger)


@pytest.fixture
def make_context():
    def factory(entity: str, profile: str = "magento19") -> MigrationContext:
        return MigrationContext(
            connection_id=CONNECTION_ID,
            run_id=RUN_ID,
            profile_name=profile,
            data_set=DATA_SETS[entity](),
        )

    return factory
