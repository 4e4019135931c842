"""
Maintenance record API endpoints and per-appliance cost rollups.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional

from landlord_api.services.maintenance import MaintenanceService, DEFAULT_LIST_LIMIT
from landlord_api.schemas.maintenance import (
    MaintenanceCreate,
    MaintenanceUpdate,
    MaintenanceResponse,
    MaintenanceListItem,
    MaintenanceCostRollup
)
from landlord_api.schemas.property import MessageResponse
from landlord_api.schemas.error import get_crud_error_responses, get_read_error_responses
from landlord_api.utils.dependencies import get_maintenance_service


router = APIRouter(prefix="/maintenance", tags=["Maintenance"])


@router.post(
    "",
    response_model=MaintenanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record maintenance",
    description=(
        "Record maintenance on an appliance. A completed repair or replacement "
        "returns the appliance to working and resolves its open issues."
    ),
    responses=get_crud_error_responses()
)
async def create_maintenance(
    record_data: MaintenanceCreate,
    maintenance_service: MaintenanceService = Depends(get_maintenance_service)
) -> MaintenanceResponse:
    record = await maintenance_service.create_record(record_data)
    return MaintenanceResponse.model_validate(record.to_dict())


@router.get(
    "",
    response_model=List[MaintenanceListItem],
    summary="List maintenance records",
    description="Most recent maintenance first, with appliance name and property address",
    responses=get_crud_error_responses()
)
async def list_maintenance(
    appliance_id: Optional[int] = Query(None, gt=0, description="Only records for this appliance"),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=500, description="Maximum number of records"),
    maintenance_service: MaintenanceService = Depends(get_maintenance_service)
) -> List[MaintenanceListItem]:
    rows = await maintenance_service.list_records(appliance_id=appliance_id, limit=limit)
    return [MaintenanceListItem.model_validate(row) for row in rows]


# Declared before /{record_id} so "costs" is not parsed as an id
@router.get(
    "/costs",
    response_model=List[MaintenanceCostRollup],
    summary="Maintenance cost per appliance",
    responses=get_read_error_responses()
)
async def maintenance_costs(
    property_id: Optional[int] = Query(None, gt=0, description="Only appliances of this property"),
    maintenance_service: MaintenanceService = Depends(get_maintenance_service)
) -> List[MaintenanceCostRollup]:
    rows = await maintenance_service.cost_rollups(property_id=property_id)
    return [MaintenanceCostRollup.model_validate(row) for row in rows]


@router.get(
    "/{record_id}",
    response_model=MaintenanceResponse,
    summary="Get maintenance record",
    responses=get_crud_error_responses()
)
async def get_maintenance(
    record_id: int = Path(..., description="Maintenance record ID"),
    maintenance_service: MaintenanceService = Depends(get_maintenance_service)
) -> MaintenanceResponse:
    record = await maintenance_service.get_record(record_id)
    return MaintenanceResponse.model_validate(record.to_dict())


@router.put(
    "/{record_id}",
    response_model=MaintenanceResponse,
    summary="Update maintenance record",
    description="Only the fields present in the body are changed",
    responses=get_crud_error_responses()
)
async def update_maintenance(
    record_data: MaintenanceUpdate,
    record_id: int = Path(..., description="Maintenance record ID"),
    maintenance_service: MaintenanceService = Depends(get_maintenance_service)
) -> MaintenanceResponse:
    record = await maintenance_service.update_record(record_id, record_data)
    return MaintenanceResponse.model_validate(record.to_dict())


@router.delete(
    "/{record_id}",
    response_model=MessageResponse,
    summary="Delete maintenance record",
    responses=get_crud_error_responses()
)
async def delete_maintenance(
    record_id: int = Path(..., description="Maintenance record ID"),
    maintenance_service: MaintenanceService = Depends(get_maintenance_service)
) -> MessageResponse:
    await maintenance_service.delete_record(record_id)
    return MessageResponse(message="Maintenance record deleted successfully")
