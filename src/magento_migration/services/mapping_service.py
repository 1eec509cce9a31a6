import asyncio
from typing import Any, Dict, List, Optional, Set, Tuple
from uuid import uuid4
from magento_migration.decorators.cache import Cache, CacheMetrics
from magento_migration.decorators.validation import Validation, ValidationRule, non_empty_string
from magento_migration.models.mapping import EntityMapping, MappingKey
from magento_migration.models.reference import Country, Language
from magento_migration.utils.constants import DefaultEntities, ORDER_TRANSACTION_STATE_MACHINE

def new_uuid() -> str:
    return uuid4().hex

def normalize_locale(locale_code: str) -> str:
    """Magento writes locales as en_US, the target system as en-US."""
    return str(locale_code).strip().replace('_', '-')

def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ''

MAPPING_KEY_RULES = (
    ValidationRule('connection_id', non_empty_string, 'Connection id must be a non-empty string'),
    ValidationRule('entity', non_empty_string, 'Entity must be a non-empty string'),
    ValidationRule('old_identifier', _present, 'Old identifier must not be empty'),
)

class MappingService:
    """
    Resolves source identifiers to target uuids through the mapping table.

    Every mapping read or written is kept in a local cache keyed by
    ``MappingKey``. The cache is never invalidated: an instance serves a
    single run and is the only writer of new mappings during that run, so
    workers converting in parallel must each own an instance.
    """

    def __init__(
        self,
        mapping_store: 'MappingStore', # type: ignore
        countries: 'ReferenceStore', # type: ignore
        currencies: 'ReferenceStore', # type: ignore
        languages: 'ReferenceStore', # type: ignore
        taxes: 'ReferenceStore', # type: ignore
        state_machines: 'ReferenceStore', # type: ignore
        state_machine_states: 'ReferenceStore', # type: ignore
        config: 'Config', # type: ignore
        logger: 'CustomLogger', # type: ignore
    ) -> None:
        self.mapping_store = mapping_store
        self.countries = countries
        self.currencies = currencies
        self.languages = languages
        self.taxes = taxes
        self.state_machines = state_machines
        self.state_machine_states = state_machine_states
        self.config = config
        self.logger = logger

        self._mappings: Dict[MappingKey, EntityMapping] = {}
        self._preloaded: Set[Tuple[str, str]] = set()
        self._write_lock = asyncio.Lock()
        self.metrics = CacheMetrics()

        # Reference rows do not change during a run
        self.reference_cache = Cache(
            ttl=config.REFERENCE_CACHE_TTL,
            max_size=config.REFERENCE_CACHE_SIZE,
            logger=logger.logger
        )
        self.get_default_language = self.reference_cache(self._load_default_language)
        self._find_state_machine = self.reference_cache(self._load_state_machine)

    def _remember(self, mapping: EntityMapping) -> EntityMapping:
        self._mappings[mapping.key] = mapping
        self.metrics.size = len(self._mappings)
        return mapping

    async def get_mapping(
        self,
        connection_id: str,
        entity: str,
        old_identifier: Any
    ) -> Optional[EntityMapping]:
        """Return the mapping for the key or None. Never creates."""
        key = MappingKey(connection_id, entity, str(old_identifier))

        cached = self._mappings.get(key)
        if cached is not None:
            self.metrics.hits += 1
            return cached

        self.metrics.misses += 1
        mapping = await self.mapping_store.find(*key)
        if mapping is None:
            return None

        return self._remember(mapping)

    async def get_uuid(self, connection_id: str, entity: str, old_identifier: Any) -> Optional[str]:
        mapping = await self.get_mapping(connection_id, entity, old_identifier)
        return mapping.entity_uuid if mapping else None

    @Validation(*MAPPING_KEY_RULES)
    async def get_or_create_mapping(
        self,
        connection_id: str,
        entity: str,
        old_identifier: Any,
        checksum: Optional[str] = None,
        additional_data: Optional[Dict[str, Any]] = None,
        parent_id: Optional[str] = None,
        entity_value: Optional[str] = None,
    ) -> EntityMapping:
        """
        Return the mapping for the key, creating it with a fresh uuid if absent.

        With ``parent_id`` a new mapping resolves to that uuid instead, e.g. a
        Magento store resolving to the sales channel it belongs to. An
        existing mapping keeps its uuid.
        """
        async with self._write_lock:
            mapping = await self.get_mapping(connection_id, entity, old_identifier)
            if mapping is not None:
                return mapping

            mapping = EntityMapping(
                id=new_uuid(),
                connection_id=connection_id,
                entity=entity,
                old_identifier=str(old_identifier),
                entity_uuid=parent_id or new_uuid(),
                entity_value=entity_value,
                checksum=checksum,
                additional_data=additional_data,
            )
            stored = await self.mapping_store.insert_if_absent(mapping)
            self.logger.debug(f"Created mapping {entity}:{old_identifier} -> {stored.entity_uuid}")
            return self._remember(stored)

    async def _save_mapping(
        self,
        connection_id: str,
        entity: str,
        old_identifier: str,
        entity_uuid: str
    ) -> EntityMapping:
        async with self._write_lock:
            stored = await self.mapping_store.insert_if_absent(EntityMapping(
                id=new_uuid(),
                connection_id=connection_id,
                entity=entity,
                old_identifier=old_identifier,
                entity_uuid=entity_uuid,
            ))
            return self._remember(stored)

    async def update_checksum(self, mapping: EntityMapping, checksum: Optional[str]) -> EntityMapping:
        """Persist a changed checksum on an existing mapping."""
        if checksum is None or mapping.checksum == checksum:
            return mapping

        await self.mapping_store.update_checksum(mapping.id, checksum)
        return self._remember(mapping.model_copy(update={'checksum': checksum}))

    async def is_unchanged(self, connection_id: str, entity: str, old_identifier: Any, checksum: str) -> bool:
        """True when the stored checksum equals the given one."""
        mapping = await self.get_mapping(connection_id, entity, old_identifier)
        return mapping is not None and mapping.checksum == checksum

    async def _resolve_reference(
        self,
        connection_id: str,
        entity: DefaultEntities,
        identifier: Any,
        store: 'ReferenceStore', # type: ignore
        lookup_key: Any = None,
    ) -> Optional[str]:
        """
        Mapping table first, reference table second. A reference hit is
        written back as a mapping so later lookups in the run stay local.
        """
        if not _present(identifier):
            return None

        identifier = str(identifier)
        mapping = await self.get_mapping(connection_id, entity.value, identifier)
        if mapping is not None:
            return mapping.entity_uuid

        found = await store.find_by_natural_key(identifier if lookup_key is None else lookup_key)
        if found is None:
            self.logger.debug(f"No {entity.value} found for {identifier}")
            return None

        mapping = await self._save_mapping(connection_id, entity.value, identifier, found.id)
        return mapping.entity_uuid

    async def get_country_uuid(self, connection_id: str, iso: str) -> Optional[str]:
        return await self._resolve_reference(
            connection_id, DefaultEntities.COUNTRY, iso, self.countries,
            lookup_key=str(iso).upper() if _present(iso) else None
        )

    async def find_target_country(self, iso: str) -> Optional[Country]:
        """Country row of the target system. Ignores mappings written by earlier runs."""
        if not _present(iso):
            return None
        return await self.countries.find_by_natural_key(str(iso).upper())

    async def get_currency_uuid(self, connection_id: str, iso_code: str) -> Optional[str]:
        return await self._resolve_reference(
            connection_id, DefaultEntities.CURRENCY, iso_code, self.currencies,
            lookup_key=str(iso_code).upper() if _present(iso_code) else None
        )

    async def get_language_uuid(self, connection_id: str, locale_code: str) -> Optional[str]:
        return await self._resolve_reference(
            connection_id, DefaultEntities.LANGUAGE, locale_code, self.languages,
            lookup_key=normalize_locale(locale_code) if _present(locale_code) else None
        )

    async def get_tax_uuid(self, connection_id: str, tax_rate: Any) -> Optional[str]:
        return await self._resolve_reference(connection_id, DefaultEntities.TAX, tax_rate, self.taxes)

    async def _load_default_language(self) -> Language:
        language = await self.languages.find_by_id(self.config.SYSTEM_LANGUAGE_ID)
        if language is not None:
            return language

        self.logger.warning(
            f"System language {self.config.SYSTEM_LANGUAGE_ID} not found, "
            f"using configured locale {self.config.SYSTEM_LOCALE_CODE}"
        )
        return Language(id=self.config.SYSTEM_LANGUAGE_ID, locale_code=self.config.SYSTEM_LOCALE_CODE)

    async def is_default_locale(self, locale_code: str) -> bool:
        language = await self.get_default_language()
        return normalize_locale(language.locale_code) == normalize_locale(locale_code)

    async def _load_state_machine(self, technical_name: str):
        return await self.state_machines.find_by_natural_key(technical_name)

    async def get_transaction_state_uuid(self, state: str) -> Optional[str]:
        state_machine = await self._find_state_machine(ORDER_TRANSACTION_STATE_MACHINE)
        if state_machine is None:
            return None

        machine_state = await self.state_machine_states.find_by_natural_key((state_machine.id, state))
        if machine_state is None:
            return None

        return machine_state.id

    async def get_tax_rate(self, uuid: str) -> Optional[float]:
        tax = await self.taxes.find_by_id(uuid)
        if tax is None:
            return None

        return float(tax.tax_rate)

    async def get_root_category_mapping(self, connection_id: str, id: Any) -> Optional[EntityMapping]:
        """
        Resolve a root category mapping.

        The first miss loads every root category mapping of the connection
        in one query; the set of root categories of a shop is small.
        """
        entity = DefaultEntities.ROOT_CATEGORY.value
        key = MappingKey(connection_id, entity, str(id))

        cached = self._mappings.get(key)
        if cached is not None:
            self.metrics.hits += 1
            return cached

        if (connection_id, entity) in self._preloaded:
            return None

        self.metrics.misses += 1
        mappings: List[EntityMapping] = await self.mapping_store.find_by_entity(connection_id, entity)
        for mapping in mappings:
            self._remember(mapping)
        self._preloaded.add((connection_id, entity))
        self.logger.debug(f"Preloaded {len(mappings)} {entity} mappings for connection {connection_id}")

        return self._mappings.get(key)

    @property
    def cache_metrics(self) -> Dict[str, Any]:
        return {
            'hits': self.metrics.hits,
            'misses': self.metrics.misses,
            'size': self.metrics.size,
            'hit_rate': self.metrics.hit_rate,
        }
