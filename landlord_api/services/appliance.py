"""
Appliance service. Appliances are reachable only through an owned property.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from landlord_api.repositories.appliance import ApplianceRepository
from landlord_api.models.appliance import Appliance
from landlord_api.schemas.appliance import ApplianceCreate, ApplianceUpdate
import logging

logger = logging.getLogger(__name__)


class ApplianceService:

    def __init__(self, db_session: AsyncSession, owner_id: int):
        self.db = db_session
        self.owner_id = owner_id
        self.appliance_repo = ApplianceRepository(db_session, owner_id)

    async def create_appliance(self, appliance_data: ApplianceCreate) -> Appliance:
        """
        Add an appliance to an owned property.

        Raises:
            NotFoundError: If the property does not exist or is not owned
        """
        appliance = await self.appliance_repo.create(appliance_data.model_dump())
        logger.info(
            f"Appliance created by user {self.owner_id}: {appliance.name} "
            f"(ID: {appliance.id}, property {appliance.property_id})"
        )
        return appliance

    async def list_appliances(self, property_id: Optional[int] = None) -> List[Appliance]:
        return await self.appliance_repo.list_for_owner(property_id=property_id)

    async def get_appliance(self, appliance_id: int) -> Appliance:
        return await self.appliance_repo.get_by_id(appliance_id)

    async def update_appliance(self, appliance_id: int, appliance_data: ApplianceUpdate) -> Appliance:
        """Replace the mutable fields of an owned appliance."""
        appliance = await self.appliance_repo.update(appliance_id, appliance_data.model_dump())
        logger.info(f"Appliance updated by user {self.owner_id}: {appliance_id}")
        return appliance

    async def delete_appliance(self, appliance_id: int) -> None:
        await self.appliance_repo.delete(appliance_id)
        logger.info(f"Appliance deleted by user {self.owner_id}: {appliance_id}")
