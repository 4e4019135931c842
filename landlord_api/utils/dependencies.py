"""
FastAPI dependency injection utilities for authentication and services.
Every resource service is bound to the authenticated caller.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from landlord_api.database import get_db
from landlord_api.models.user import User
from landlord_api.services.auth import AuthService
from landlord_api.services.property import PropertyService
from landlord_api.services.appliance import ApplianceService
from landlord_api.services.maintenance import MaintenanceService
from landlord_api.services.issue import IssueService
from landlord_api.services.rent_payment import RentPaymentService
from landlord_api.services.reporting import ReportingService
from landlord_api.utils.exceptions import UnauthorizedError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from the bearer token.

    Raises:
        UnauthorizedError: If no token is provided
        InvalidTokenError: If the token is malformed or its user is gone
        TokenExpiredError: If the token has expired
    """
    if not credentials or not credentials.credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)


async def get_property_service(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> PropertyService:
    return PropertyService(db, current_user.id)


async def get_appliance_service(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ApplianceService:
    return ApplianceService(db, current_user.id)


async def get_maintenance_service(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> MaintenanceService:
    return MaintenanceService(db, current_user.id)


async def get_issue_service(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> IssueService:
    return IssueService(db, current_user.id)


async def get_rent_payment_service(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> RentPaymentService:
    return RentPaymentService(db, current_user.id)


async def get_reporting_service(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ReportingService:
    return ReportingService(db, current_user.id)
