"""
Reporting endpoints: rent status, maintenance dashboard and financial analytics.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from landlord_api.services.reporting import ReportingService
from landlord_api.schemas.reporting import (
    RentStatusRow,
    DashboardResponse,
    MonthlyAnalyticsRow,
    PropertyAnalyticsRow
)
from landlord_api.schemas.error import get_error_responses, get_read_error_responses
from landlord_api.utils.dependencies import get_reporting_service


router = APIRouter(tags=["Reports"])


@router.get(
    "/rent-status",
    response_model=List[RentStatusRow],
    summary="Rent status per property",
    description="Last payment, collections this month and year, and rent status",
    responses=get_read_error_responses()
)
async def rent_status(
    reporting_service: ReportingService = Depends(get_reporting_service)
) -> List[RentStatusRow]:
    rows = await reporting_service.rent_status()
    return [RentStatusRow.model_validate(row) for row in rows]


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Maintenance dashboard",
    responses=get_error_responses(400, 401, 500)
)
async def dashboard(
    time_range: str = Query("6months", description="3months, 6months or 12months"),
    reporting_service: ReportingService = Depends(get_reporting_service)
) -> DashboardResponse:
    data = await reporting_service.dashboard(time_range=time_range)
    return DashboardResponse.model_validate(data)


@router.get(
    "/monthly-analytics",
    response_model=List[MonthlyAnalyticsRow],
    summary="Monthly financial analytics",
    description="Twelve months of rent collected and maintenance cost per property",
    responses=get_error_responses(400, 401, 500)
)
async def monthly_analytics(
    year: Optional[int] = Query(None, description="Calendar year, defaults to the current year"),
    property_id: Optional[int] = Query(None, description="Only this property"),
    reporting_service: ReportingService = Depends(get_reporting_service)
) -> List[MonthlyAnalyticsRow]:
    rows = await reporting_service.monthly_analytics(year=year, property_id=property_id)
    return [MonthlyAnalyticsRow.model_validate(row) for row in rows]


@router.get(
    "/property-analytics",
    response_model=List[PropertyAnalyticsRow],
    summary="Property performance scorecards",
    responses=get_read_error_responses()
)
async def property_analytics(
    reporting_service: ReportingService = Depends(get_reporting_service)
) -> List[PropertyAnalyticsRow]:
    rows = await reporting_service.property_analytics()
    return [PropertyAnalyticsRow.model_validate(row) for row in rows]
