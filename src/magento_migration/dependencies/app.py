from dataclasses import dataclass
from fastapi import Request, HTTPException
from magento_migration.config import config
from magento_migration.converters.registry import ConverterRegistry, build_registry
from magento_migration.services.factory import create_mapping_service
from magento_migration.services.logging_service import LoggingService
from magento_migration.utils.logger import logger

@dataclass
class RunServices:
    registry: ConverterRegistry
    logging_service: LoggingService

async def get_run_services(request: Request) -> RunServices:
    """Fresh mapping cache and log collector for every conversion request."""
    db = getattr(request.app.state, 'db', None)
    if not db:
        raise HTTPException(
            status_code=500,
            detail="Database not initialized"
        )

    logging_service = LoggingService(logger, db)
    mapping_service = create_mapping_service(db, config, logger)
    return RunServices(
        registry=build_registry(mapping_service, logging_service, logger),
        logging_service=logging_service,
    )
