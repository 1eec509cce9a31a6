from dataclasses import asdict
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from magento_migration.data_selection import DATA_SETS, get_data_selections
from magento_migration.dependencies.app import RunServices, get_run_services
from magento_migration.dependencies.auth import verify_token
from magento_migration.models.context import MigrationContext
from magento_migration.utils.exceptions import ConverterNotFoundError
from magento_migration.utils.logger import logger

router = APIRouter()

class ConvertRequest(BaseModel):
    connection_id: str = Field(min_length=1)
    run_id: str = Field(min_length=1)
    profile: str
    entity: str
    records: List[Dict[str, Any]] = Field(default_factory=list)

@router.get("/data-selections")
async def list_data_selections(profile: str, token: str = Depends(verify_token)):
    """Data selections a profile can migrate"""
    return {
        "status": "success",
        "profile": profile,
        "data_selections": [asdict(selection) for selection in get_data_selections(profile)],
    }

@router.post("/convert")
async def convert_records(
    body: ConvertRequest,
    services: RunServices = Depends(get_run_services),
    token: str = Depends(verify_token)
):
    """Convert a batch of raw records of one entity type"""
    data_set_class = DATA_SETS.get(body.entity)
    if data_set_class is None:
        raise HTTPException(
            status_code=404,
            detail={"status": "error", "message": f"Unknown entity {body.entity}"}
        )

    context = MigrationContext(
        connection_id=body.connection_id,
        run_id=body.run_id,
        profile_name=body.profile,
        data_set=data_set_class(),
    )
    if not context.data_set.supports(context):
        raise HTTPException(
            status_code=422,
            detail={
                "status": "error",
                "message": f"Entity {body.entity} is not supported for profile {body.profile}"
            }
        )

    try:
        results = await services.registry.convert_batch(body.records, context)
    except ConverterNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())

    logs = [entry.to_dict() for entry in services.logging_service.entries]
    await services.logging_service.save_logs()

    logger.debug(f"Converted batch of {len(results)} {body.entity} records for run {body.run_id}")

    return {
        "status": "success",
        "entity": body.entity,
        "results": [result.to_dict() for result in results],
        "logs": logs,
    }
