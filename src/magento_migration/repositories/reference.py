from decimal import Decimal
from typing import Any, ClassVar, Optional, Tuple, Type
from magento_migration.models.reference import (
    ReferenceEntity,
    Country,
    Currency,
    Language,
    Tax,
    StateMachine,
    StateMachineState,
)

class ReferenceRepository:
    """
    Lookup of one reference table by id or by its natural key.

    Subclasses name the select statement, the natural key column(s) and the
    model rows are parsed into.
    """

    model: ClassVar[Type[ReferenceEntity]]
    select: ClassVar[str]
    natural_key: ClassVar[Tuple[str, ...]]

    def __init__(self, db: 'Database'): # type: ignore
        self.db = db

    def _key_values(self, key: Any) -> tuple:
        return key if isinstance(key, tuple) else (key,)

    async def find_by_natural_key(self, key: Any) -> Optional[ReferenceEntity]:
        values = self._key_values(key)
        conditions = " AND ".join(
            f"{column} = ${index}" for index, column in enumerate(self.natural_key, start=1)
        )
        record = await self.db.fetchrow(f"{self.select} WHERE {conditions} LIMIT 1", *values)
        return self.model.model_validate(record) if record else None

    async def find_by_id(self, id: str) -> Optional[ReferenceEntity]:
        record = await self.db.fetchrow(f"{self.select} WHERE id = $1", id)
        return self.model.model_validate(record) if record else None

class CountryRepository(ReferenceRepository):
    model = Country
    select = "SELECT id, iso, iso3 FROM country"
    natural_key = ('iso',)

class CurrencyRepository(ReferenceRepository):
    model = Currency
    select = "SELECT id, iso_code FROM currency"
    natural_key = ('iso_code',)

class LanguageRepository(ReferenceRepository):
    model = Language
    select = """
        SELECT language.id AS id, locale.code AS locale_code
        FROM language
        JOIN locale ON locale.id = language.locale_id
    """
    natural_key = ('locale.code',)

    async def find_by_id(self, id: str) -> Optional[ReferenceEntity]:
        record = await self.db.fetchrow(f"{self.select} WHERE language.id = $1", id)
        return self.model.model_validate(record) if record else None

class TaxRepository(ReferenceRepository):
    model = Tax
    select = "SELECT id, tax_rate FROM tax"
    natural_key = ('tax_rate',)

    def _key_values(self, key: Any) -> tuple:
        return (Decimal(str(key)),)

class StateMachineRepository(ReferenceRepository):
    model = StateMachine
    select = "SELECT id, technical_name FROM state_machine"
    natural_key = ('technical_name',)

class StateMachineStateRepository(ReferenceRepository):
    """Natural key is (state machine id, technical name)."""
    model = StateMachineState
    select = "SELECT id, state_machine_id, technical_name FROM state_machine_state"
    natural_key = ('state_machine_id', 'technical_name')
