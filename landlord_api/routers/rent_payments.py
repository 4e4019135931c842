"""
Rent payment API endpoints.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional

from landlord_api.services.rent_payment import RentPaymentService
from landlord_api.schemas.rent_payment import (
    RentPaymentCreate,
    RentPaymentUpdate,
    RentPaymentResponse,
    RentPaymentListItem
)
from landlord_api.schemas.property import MessageResponse
from landlord_api.schemas.error import get_crud_error_responses
from landlord_api.utils.dependencies import get_rent_payment_service


router = APIRouter(prefix="/rent-payments", tags=["Rent Payments"])


@router.post(
    "",
    response_model=RentPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record rent payment",
    responses=get_crud_error_responses()
)
async def create_rent_payment(
    payment_data: RentPaymentCreate,
    payment_service: RentPaymentService = Depends(get_rent_payment_service)
) -> RentPaymentResponse:
    payment = await payment_service.record_payment(payment_data)
    return RentPaymentResponse.model_validate(payment.to_dict())


@router.get(
    "",
    response_model=List[RentPaymentListItem],
    summary="List rent payments",
    description="Newest payment first, with the property address",
    responses=get_crud_error_responses()
)
async def list_rent_payments(
    property_id: Optional[int] = Query(None, gt=0, description="Only payments for this property"),
    payment_service: RentPaymentService = Depends(get_rent_payment_service)
) -> List[RentPaymentListItem]:
    rows = await payment_service.list_payments(property_id=property_id)
    return [RentPaymentListItem.model_validate(row) for row in rows]


@router.get(
    "/{payment_id}",
    response_model=RentPaymentResponse,
    summary="Get rent payment",
    responses=get_crud_error_responses()
)
async def get_rent_payment(
    payment_id: int = Path(..., description="Rent payment ID"),
    payment_service: RentPaymentService = Depends(get_rent_payment_service)
) -> RentPaymentResponse:
    payment = await payment_service.get_payment(payment_id)
    return RentPaymentResponse.model_validate(payment.to_dict())


@router.put(
    "/{payment_id}",
    response_model=RentPaymentResponse,
    summary="Update rent payment",
    responses=get_crud_error_responses()
)
async def update_rent_payment(
    payment_data: RentPaymentUpdate,
    payment_id: int = Path(..., description="Rent payment ID"),
    payment_service: RentPaymentService = Depends(get_rent_payment_service)
) -> RentPaymentResponse:
    payment = await payment_service.update_payment(payment_id, payment_data)
    return RentPaymentResponse.model_validate(payment.to_dict())


@router.delete(
    "/{payment_id}",
    response_model=MessageResponse,
    summary="Delete rent payment",
    responses=get_crud_error_responses()
)
async def delete_rent_payment(
    payment_id: int = Path(..., description="Rent payment ID"),
    payment_service: RentPaymentService = Depends(get_rent_payment_service)
) -> MessageResponse:
    await payment_service.delete_payment(payment_id)
    return MessageResponse(message="Rent payment deleted successfully")
