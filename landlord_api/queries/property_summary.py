"""
Property list with appliance counts.
"""

from sqlalchemy import select, func
from typing import Any, Dict, List

from landlord_api.models.appliance import Appliance
from landlord_api.models.property import Property
from landlord_api.queries.base import OwnerQuery


class PropertySummaryQuery(OwnerQuery):
    """
    Rows: every Property column (see ``Property.to_dict``) plus
    ``appliance_count`` (int, 0 when the property has none).
    Ordered newest first.
    """

    name = "property_summary"

    async def fetch(self) -> List[Dict[str, Any]]:
        counts = (
            select(Appliance.property_id, func.count(Appliance.id).label("appliance_count"))
            .group_by(Appliance.property_id)
            .subquery()
        )
        query = (
            select(Property, func.coalesce(counts.c.appliance_count, 0))
            .outerjoin(counts, counts.c.property_id == Property.id)
            .where(Property.user_id == self.owner_id)
            .order_by(Property.created_at.desc(), Property.id.desc())
        )
        result = await self.db.execute(query)

        rows = []
        for prop, appliance_count in result.all():
            row = prop.to_dict()
            row["appliance_count"] = int(appliance_count or 0)
            rows.append(row)

        self._log(rows)
        return rows
