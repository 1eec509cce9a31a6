from magento_migration.repositories import (
    MappingRepository,
    CountryRepository,
    CurrencyRepository,
    LanguageRepository,
    TaxRepository,
    StateMachineRepository,
    StateMachineStateRepository,
)
from magento_migration.services.mapping_service import MappingService

def create_mapping_service(db: 'Database', config: 'Config', logger: 'CustomLogger') -> MappingService: # type: ignore
    """Mapping service backed by the database. Create one per run."""
    return MappingService(
        mapping_store=MappingRepository(db),
        countries=CountryRepository(db),
        currencies=CurrencyRepository(db),
        languages=LanguageRepository(db),
        taxes=TaxRepository(db),
        state_machines=StateMachineRepository(db),
        state_machine_states=StateMachineStateRepository(db),
        config=config,
        logger=logger,
    )
