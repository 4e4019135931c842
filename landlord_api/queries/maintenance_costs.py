"""
Per-appliance maintenance cost rollups.
"""

from sqlalchemy import select, func
from typing import Any, Dict, List, Optional

from landlord_api.models.appliance import Appliance
from landlord_api.models.maintenance import MaintenanceRecord
from landlord_api.models.property import Property
from landlord_api.queries.base import OwnerQuery
from landlord_api.queries.classifiers import to_float, to_int


class MaintenanceRollupQuery(OwnerQuery):
    """
    One row per owned appliance (optionally restricted to one property):

        appliance_id, appliance_name, property_id, property_address,
        status, last_maintenance (date | None),
        total_maintenance_cost (float), last_maintenance_cost (float),
        maintenance_count (int)

    Appliances without maintenance records report 0 for all three rollups.
    """

    name = "maintenance_rollup"

    def __init__(self, db, owner_id, property_id: Optional[int] = None, today=None):
        super().__init__(db, owner_id, today)
        self.property_id = property_id

    def statement(self):
        last_cost = (
            select(MaintenanceRecord.cost)
            .where(MaintenanceRecord.appliance_id == Appliance.id)
            .order_by(
                MaintenanceRecord.maintenance_date.desc(),
                MaintenanceRecord.created_at.desc(),
                MaintenanceRecord.id.desc(),
            )
            .limit(1)
            .correlate(Appliance)
            .scalar_subquery()
        )

        query = (
            select(
                Appliance.id.label("appliance_id"),
                Appliance.name.label("appliance_name"),
                Property.id.label("property_id"),
                Property.address.label("property_address"),
                Appliance.status,
                Appliance.last_maintenance,
                func.coalesce(func.sum(func.coalesce(MaintenanceRecord.cost, 0)), 0).label("total_maintenance_cost"),
                last_cost.label("last_maintenance_cost"),
                func.count(MaintenanceRecord.id).label("maintenance_count"),
            )
            .select_from(Appliance)
            .join(Property, Appliance.property_id == Property.id)
            .outerjoin(MaintenanceRecord, MaintenanceRecord.appliance_id == Appliance.id)
            .where(Property.user_id == self.owner_id)
            .group_by(
                Appliance.id,
                Appliance.name,
                Property.id,
                Property.address,
                Appliance.status,
                Appliance.last_maintenance,
            )
            .order_by(Property.address, Appliance.name, Appliance.id)
        )
        if self.property_id is not None:
            query = query.where(Property.id == self.property_id)
        return query

    async def fetch(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(self.statement())

        rows = []
        for row in result.mappings():
            rows.append({
                "appliance_id": row["appliance_id"],
                "appliance_name": row["appliance_name"],
                "property_id": row["property_id"],
                "property_address": row["property_address"],
                "status": row["status"].value,
                "last_maintenance": row["last_maintenance"],
                "total_maintenance_cost": to_float(row["total_maintenance_cost"]),
                "last_maintenance_cost": to_float(row["last_maintenance_cost"]),
                "maintenance_count": to_int(row["maintenance_count"]),
            })

        self._log(rows)
        return rows
