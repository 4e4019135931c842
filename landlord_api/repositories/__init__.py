"""
Repository layer for data access operations.
Every repository except UserRepository is bound to an owner at construction.
"""

from landlord_api.repositories.base import BaseRepository
from landlord_api.repositories.owned import OwnedRepository
from landlord_api.repositories.user import UserRepository
from landlord_api.repositories.property import PropertyRepository
from landlord_api.repositories.appliance import ApplianceRepository
from landlord_api.repositories.maintenance import MaintenanceRepository
from landlord_api.repositories.issue import IssueRepository
from landlord_api.repositories.rent_payment import RentPaymentRepository

__all__ = [
    "BaseRepository",
    "OwnedRepository",
    "UserRepository",
    "PropertyRepository",
    "ApplianceRepository",
    "MaintenanceRepository",
    "IssueRepository",
    "RentPaymentRepository",
]
