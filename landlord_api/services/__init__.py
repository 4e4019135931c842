"""
Service layer for business logic implementation.
Services are bound to the authenticated owner; auth and error handling are global.
"""

from .auth import AuthService
from .property import PropertyService
from .appliance import ApplianceService
from .maintenance import MaintenanceService
from .issue import IssueService
from .rent_payment import RentPaymentService
from .reporting import ReportingService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "ApplianceService",
    "MaintenanceService",
    "IssueService",
    "RentPaymentService",
    "ReportingService",
    "ErrorHandlerService"
]
