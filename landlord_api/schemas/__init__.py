"""
Pydantic schemas for request/response validation.
"""

from .auth import RegisterRequest, RegisterResponse, LoginRequest, LoginResponse
from .user import UserResponse
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertySummary,
    PropertyDetailResponse,
    MessageResponse
)
from .appliance import ApplianceCreate, ApplianceUpdate, ApplianceResponse
from .maintenance import (
    MaintenanceCreate,
    MaintenanceUpdate,
    MaintenanceResponse,
    MaintenanceListItem,
    MaintenanceCostRollup
)
from .issue import IssueCreate, IssueUpdate, IssueResponse, IssueListItem
from .rent_payment import (
    RentPaymentCreate,
    RentPaymentUpdate,
    RentPaymentResponse,
    RentPaymentListItem
)
from .reporting import (
    RentStatusRow,
    DashboardResponse,
    MonthlyAnalyticsRow,
    PropertyAnalyticsRow
)

__all__ = [
    # Authentication
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "UserResponse",

    # Properties
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertySummary",
    "PropertyDetailResponse",
    "MessageResponse",

    # Appliances
    "ApplianceCreate",
    "ApplianceUpdate",
    "ApplianceResponse",

    # Maintenance
    "MaintenanceCreate",
    "MaintenanceUpdate",
    "MaintenanceResponse",
    "MaintenanceListItem",
    "MaintenanceCostRollup",

    # Issues
    "IssueCreate",
    "IssueUpdate",
    "IssueResponse",
    "IssueListItem",

    # Rent
    "RentPaymentCreate",
    "RentPaymentUpdate",
    "RentPaymentResponse",
    "RentPaymentListItem",

    # Reports
    "RentStatusRow",
    "DashboardResponse",
    "MonthlyAnalyticsRow",
    "PropertyAnalyticsRow",
]
