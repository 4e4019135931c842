"""
Property service for managing the caller's properties.
Every operation is scoped to the authenticated owner.
"""

from typing import List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from landlord_api.repositories.property import PropertyRepository
from landlord_api.repositories.appliance import ApplianceRepository
from landlord_api.models.property import Property
from landlord_api.models.appliance import Appliance
from landlord_api.schemas.property import PropertyCreate, PropertyUpdate
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for landlord CRUD. Another owner's property behaves
    exactly like a missing one.
    """

    def __init__(self, db_session: AsyncSession, owner_id: int):
        self.db = db_session
        self.owner_id = owner_id
        self.property_repo = PropertyRepository(db_session, owner_id)
        self.appliance_repo = ApplianceRepository(db_session, owner_id)

    async def create_property(self, property_data: PropertyCreate) -> Property:
        """
        Create a property owned by the caller.

        Args:
            property_data: Validated property fields

        Returns:
            Created property instance
        """
        property_obj = await self.property_repo.create(property_data.model_dump())
        logger.info(f"Property created by user {self.owner_id}: {property_obj.address} (ID: {property_obj.id})")
        return property_obj

    async def list_properties(self) -> List[Dict[str, Any]]:
        """Owned properties, newest first, with appliance counts."""
        return await self.property_repo.list_with_appliance_counts()

    async def get_property(self, property_id: int) -> Property:
        """
        Raises:
            NotFoundError: If the property does not exist or is not owned
        """
        return await self.property_repo.get_by_id(property_id)

    async def get_property_with_appliances(self, property_id: int) -> Dict[str, Any]:
        """
        Property plus its appliances, newest appliance first.

        Returns:
            {"property": Property, "appliances": [Appliance, ...]}
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        appliances: List[Appliance] = await self.appliance_repo.list_for_owner(property_id=property_id)
        return {"property": property_obj, "appliances": appliances}

    async def update_property(self, property_id: int, property_data: PropertyUpdate) -> Property:
        """
        Replace the mutable fields of an owned property.

        Raises:
            NotFoundError: If the property does not exist or is not owned
        """
        property_obj = await self.property_repo.update(property_id, property_data.model_dump())
        logger.info(f"Property updated by user {self.owner_id}: {property_id}")
        return property_obj

    async def delete_property(self, property_id: int) -> None:
        """
        Delete an owned property together with its appliances, maintenance
        records, issues and rent payments.

        Raises:
            NotFoundError: If the property does not exist or is not owned
        """
        await self.property_repo.delete(property_id)
        logger.info(f"Property deleted by user {self.owner_id}: {property_id}")
