"""
Database models for the Landlord API.
Includes User, Property, Appliance, MaintenanceRecord, Issue and RentPayment.
"""

from landlord_api.models.user import User, UserRole
from landlord_api.models.property import Property
from landlord_api.models.appliance import Appliance, ApplianceStatus
from landlord_api.models.maintenance import MaintenanceRecord, MaintenanceType, MaintenanceStatus
from landlord_api.models.issue import Issue, IssueUrgency, IssueStatus
from landlord_api.models.rent_payment import RentPayment

__all__ = [
    "User",
    "UserRole",
    "Property",
    "Appliance",
    "ApplianceStatus",
    "MaintenanceRecord",
    "MaintenanceType",
    "MaintenanceStatus",
    "Issue",
    "IssueUrgency",
    "IssueStatus",
    "RentPayment",
]
