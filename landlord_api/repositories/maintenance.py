"""
Maintenance record repository, scoped through appliance and property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from datetime import date
from typing import Dict, Any, List, Optional
import logging

from landlord_api.models.appliance import Appliance, ApplianceStatus
from landlord_api.models.maintenance import MaintenanceRecord
from landlord_api.models.property import Property
from landlord_api.repositories.owned import OwnedRepository
from landlord_api.repositories.appliance import ApplianceRepository

logger = logging.getLogger(__name__)


class MaintenanceRepository(OwnedRepository[MaintenanceRecord]):

    ownership_path = (MaintenanceRecord.appliance, Appliance.property)
    resource_name = "Maintenance record"
    mutable_fields = (
        "maintenance_type",
        "description",
        "cost",
        "technician_name",
        "technician_company",
        "maintenance_date",
        "next_due_date",
        "notes",
        "parts_replaced",
        "warranty_until",
        "status",
    )

    def __init__(self, db: AsyncSession, owner_id: int):
        super().__init__(MaintenanceRecord, db, owner_id)

    def default_order(self):
        return (
            MaintenanceRecord.maintenance_date.desc(),
            MaintenanceRecord.created_at.desc(),
            MaintenanceRecord.id.desc(),
        )

    async def create(self, obj_in: Dict[str, Any], commit: bool = True) -> MaintenanceRecord:
        return await self.create_under(ApplianceRepository, obj_in["appliance_id"], obj_in, commit=commit)

    async def list_with_context(
        self,
        appliance_id: Optional[int] = None,
        limit: int = 50
    ) -> List[Dict[str, Any]]:
        """
        Owned maintenance records with the appliance name and property address,
        most recent maintenance_date first.
        """
        query = self.scoped(
            MaintenanceRecord,
            Appliance.name.label("appliance_name"),
            Property.address.label("property_address"),
        )
        if appliance_id is not None:
            query = query.where(MaintenanceRecord.appliance_id == appliance_id)
        query = query.order_by(*self.default_order()).limit(limit)

        result = await self.db.execute(query)
        records = []
        for record, appliance_name, property_address in result.all():
            row = record.to_dict()
            row["appliance_name"] = appliance_name
            row["property_address"] = property_address
            records.append(row)
        return records

    async def mark_appliance_serviced(
        self,
        appliance_id: int,
        maintenance_date: date,
        restore_status: bool
    ) -> None:
        """
        Record a service event on the appliance inside the current transaction.

        last_maintenance only moves forward. When restore_status is set the
        appliance goes back to working.
        """
        appliance = await ApplianceRepository(self.db, self.owner_id).get_by_id(appliance_id)

        values: Dict[str, Any] = {}
        if appliance.last_maintenance is None or maintenance_date > appliance.last_maintenance:
            values["last_maintenance"] = maintenance_date
        if restore_status and appliance.status != ApplianceStatus.WORKING:
            values["status"] = ApplianceStatus.WORKING

        if values:
            await self.db.execute(
                update(Appliance)
                .where(Appliance.id == appliance_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            # only the written columns; the next SELECT reloads them
            self.db.expire(appliance, list(values))
            logger.info(f"Appliance {appliance_id} serviced: {sorted(values)}")
