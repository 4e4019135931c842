"""
Appliance repository. Ownership is inherited through the parent property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional

from landlord_api.models.appliance import Appliance
from landlord_api.repositories.owned import OwnedRepository
from landlord_api.repositories.property import PropertyRepository


class ApplianceRepository(OwnedRepository[Appliance]):

    ownership_path = (Appliance.property,)
    resource_name = "Appliance"
    mutable_fields = ("name", "type", "installation_date", "last_maintenance", "status")

    def __init__(self, db: AsyncSession, owner_id: int):
        super().__init__(Appliance, db, owner_id)

    async def create(self, obj_in: Dict[str, Any], commit: bool = True) -> Appliance:
        return await self.create_under(PropertyRepository, obj_in["property_id"], obj_in, commit=commit)

    async def list_for_owner(
        self,
        property_id: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Appliance]:
        return await super().list_for_owner({"property_id": property_id}, limit=limit)
