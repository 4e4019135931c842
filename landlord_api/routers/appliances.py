"""
Appliance API endpoints. Appliances are visible only through owned properties.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional

from landlord_api.services.appliance import ApplianceService
from landlord_api.schemas.appliance import ApplianceCreate, ApplianceUpdate, ApplianceResponse
from landlord_api.schemas.property import MessageResponse
from landlord_api.schemas.error import get_crud_error_responses
from landlord_api.utils.dependencies import get_appliance_service


router = APIRouter(prefix="/appliances", tags=["Appliances"])


@router.post(
    "",
    response_model=ApplianceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add appliance",
    description="Add an appliance to one of your properties. Status defaults to working.",
    responses=get_crud_error_responses()
)
async def create_appliance(
    appliance_data: ApplianceCreate,
    appliance_service: ApplianceService = Depends(get_appliance_service)
) -> ApplianceResponse:
    appliance = await appliance_service.create_appliance(appliance_data)
    return ApplianceResponse.model_validate(appliance.to_dict())


@router.get(
    "",
    response_model=List[ApplianceResponse],
    summary="List appliances",
    responses=get_crud_error_responses()
)
async def list_appliances(
    property_id: Optional[int] = Query(None, gt=0, description="Only appliances of this property"),
    appliance_service: ApplianceService = Depends(get_appliance_service)
) -> List[ApplianceResponse]:
    appliances = await appliance_service.list_appliances(property_id=property_id)
    return [ApplianceResponse.model_validate(a.to_dict()) for a in appliances]


@router.get(
    "/{appliance_id}",
    response_model=ApplianceResponse,
    summary="Get appliance",
    responses=get_crud_error_responses()
)
async def get_appliance(
    appliance_id: int = Path(..., description="Appliance ID"),
    appliance_service: ApplianceService = Depends(get_appliance_service)
) -> ApplianceResponse:
    appliance = await appliance_service.get_appliance(appliance_id)
    return ApplianceResponse.model_validate(appliance.to_dict())


@router.put(
    "/{appliance_id}",
    response_model=ApplianceResponse,
    summary="Update appliance",
    description="Replace name, type, dates and status. The property cannot be changed.",
    responses=get_crud_error_responses()
)
async def update_appliance(
    appliance_data: ApplianceUpdate,
    appliance_id: int = Path(..., description="Appliance ID"),
    appliance_service: ApplianceService = Depends(get_appliance_service)
) -> ApplianceResponse:
    appliance = await appliance_service.update_appliance(appliance_id, appliance_data)
    return ApplianceResponse.model_validate(appliance.to_dict())


@router.delete(
    "/{appliance_id}",
    response_model=MessageResponse,
    summary="Delete appliance",
    responses=get_crud_error_responses()
)
async def delete_appliance(
    appliance_id: int = Path(..., description="Appliance ID"),
    appliance_service: ApplianceService = Depends(get_appliance_service)
) -> MessageResponse:
    await appliance_service.delete_appliance(appliance_id)
    return MessageResponse(message="Appliance deleted successfully")
