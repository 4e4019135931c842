"""
Property repository scoped to the owning user.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List
import logging

from landlord_api.models.property import Property
from landlord_api.repositories.owned import OwnedRepository
from landlord_api.queries.property_summary import PropertySummaryQuery

logger = logging.getLogger(__name__)


class PropertyRepository(OwnedRepository[Property]):
    """Properties owned by one user. user_id is set on create and never updated."""

    resource_name = "Property"
    mutable_fields = ("address", "property_type", "monthly_rent")

    def __init__(self, db: AsyncSession, owner_id: int):
        super().__init__(Property, db, owner_id)

    async def create(self, obj_in: Dict[str, Any], commit: bool = True) -> Property:
        data = dict(obj_in)
        data["user_id"] = self.owner_id
        return await super().create(data, commit=commit)

    async def list_with_appliance_counts(self) -> List[Dict[str, Any]]:
        """Owned properties, newest first, each with its appliance_count."""
        return await PropertySummaryQuery(self.db, self.owner_id).fetch()
