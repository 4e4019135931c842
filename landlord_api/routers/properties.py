"""
Property management API endpoints.
All routes act on the authenticated landlord's own properties.
"""

from fastapi import APIRouter, Depends, Path, status
from typing import List

from landlord_api.services.property import PropertyService
from landlord_api.schemas.appliance import ApplianceResponse
from landlord_api.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertySummary,
    PropertyDetailResponse,
    MessageResponse
)
from landlord_api.schemas.error import get_crud_error_responses, get_read_error_responses
from landlord_api.utils.dependencies import get_property_service


router = APIRouter(tags=["Properties"])


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a property owned by the caller. monthly_rent is optional.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_property(property_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.get(
    "/properties",
    response_model=List[PropertySummary],
    summary="List properties",
    description="The caller's properties, newest first, with appliance counts",
    responses=get_read_error_responses()
)
async def list_properties(
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertySummary]:
    rows = await property_service.list_properties()
    return [PropertySummary.model_validate(row) for row in rows]


@router.get(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Get property",
    responses=get_crud_error_responses()
)
async def get_property(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.get(
    "/property/{property_id}",
    response_model=PropertyDetailResponse,
    summary="Get property with appliances",
    responses=get_crud_error_responses()
)
async def get_property_detail(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyDetailResponse:
    detail = await property_service.get_property_with_appliances(property_id)
    return PropertyDetailResponse(
        property=PropertyResponse.model_validate(detail["property"].to_dict()),
        appliances=[ApplianceResponse.model_validate(a.to_dict()) for a in detail["appliances"]]
    )


@router.put(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Replace address, property_type and monthly_rent",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(property_id, property_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.delete(
    "/properties/{property_id}",
    response_model=MessageResponse,
    summary="Delete property",
    description="Deletes the property and everything attached to it",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_property(property_id)
    return MessageResponse(message="Property deleted successfully")
