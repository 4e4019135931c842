"""
Maintenance service.

Recording maintenance is a single transaction: the record is inserted, the
appliance's last_maintenance moves forward, and a completed repair or
replacement puts the appliance back to working and resolves its active issues.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from landlord_api.repositories.maintenance import MaintenanceRepository
from landlord_api.repositories.issue import IssueRepository
from landlord_api.models.maintenance import MaintenanceRecord
from landlord_api.queries.maintenance_costs import MaintenanceRollupQuery
from landlord_api.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
import logging

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


class MaintenanceService:
    """Maintenance records and cost rollups for one owner."""

    def __init__(self, db_session: AsyncSession, owner_id: int):
        self.db = db_session
        self.owner_id = owner_id
        self.maintenance_repo = MaintenanceRepository(db_session, owner_id)
        self.issue_repo = IssueRepository(db_session, owner_id)

    async def create_record(self, record_data: MaintenanceCreate) -> MaintenanceRecord:
        """
        Record maintenance and apply its effects on the appliance and issues.

        Args:
            record_data: Validated maintenance fields

        Returns:
            The created maintenance record

        Raises:
            NotFoundError: If the appliance does not exist or is not owned
        """
        try:
            record = await self.maintenance_repo.create(record_data.model_dump(), commit=False)

            await self.maintenance_repo.mark_appliance_serviced(
                record.appliance_id,
                record.maintenance_date,
                restore_status=record.restores_appliance
            )

            if record.restores_appliance:
                note = f"{record.maintenance_type.value} maintenance completed - {record.description}"
                await self.issue_repo.resolve_active_for_appliance(
                    record.appliance_id,
                    maintenance_record_id=record.id,
                    resolved_on=record.maintenance_date,
                    note=note
                )

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Maintenance recorded by user {self.owner_id}: {record.maintenance_type.value} "
            f"on appliance {record.appliance_id} (ID: {record.id})"
        )
        return record

    async def list_records(
        self,
        appliance_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT
    ) -> List[Dict[str, Any]]:
        return await self.maintenance_repo.list_with_context(appliance_id=appliance_id, limit=limit)

    async def get_record(self, record_id: int) -> MaintenanceRecord:
        return await self.maintenance_repo.get_by_id(record_id)

    async def update_record(self, record_id: int, record_data: MaintenanceUpdate) -> MaintenanceRecord:
        """Write only the fields present in the payload."""
        record = await self.maintenance_repo.update(record_id, record_data.model_dump(exclude_unset=True))
        logger.info(f"Maintenance record updated by user {self.owner_id}: {record_id}")
        return record

    async def delete_record(self, record_id: int) -> None:
        await self.maintenance_repo.delete(record_id)
        logger.info(f"Maintenance record deleted by user {self.owner_id}: {record_id}")

    async def cost_rollups(self, property_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Per-appliance spend; appliances without records report zeros."""
        return await MaintenanceRollupQuery(self.db, self.owner_id, property_id=property_id).fetch()
