"""
Dashboard summary across all of an owner's properties.
"""

from sqlalchemy import select, func, case, distinct
from collections import OrderedDict
from datetime import timedelta
from typing import Any, Dict, List

from landlord_api.models.appliance import Appliance, BROKEN_STATUSES
from landlord_api.models.issue import Issue, IssueUrgency, ACTIVE_ISSUE_STATUSES
from landlord_api.models.maintenance import MaintenanceRecord
from landlord_api.models.property import Property
from landlord_api.queries.base import OwnerQuery
from landlord_api.queries.classifiers import first_of_month_back, to_float, to_int

TIME_RANGES = {"3months": 3, "6months": 6, "12months": 12}
DEFAULT_TIME_RANGE = "6months"
UPCOMING_WINDOW_DAYS = 30


class DashboardQuery(OwnerQuery):
    """
    Output shape::

        {
          "time_range": str,
          "overview": {total_properties, total_appliances, broken_appliances,
                       open_issues, critical_issues, total_maintenance_records,
                       total_maintenance_cost, average_cost_per_maintenance,
                       overdue_maintenance_count, upcoming_maintenance_count,
                       items_needing_attention},
          "recent_maintenance": [...10],
          "expensive_appliances": [...10],
          "properties_needing_attention": [...5],
          "monthly_spending": [{month, total_cost, maintenance_count}, ...6, oldest first]
        }

    Maintenance totals, expensive appliances and monthly spending cover the
    window starting on the first day of the month ``time_range`` months ago.
    """

    name = "dashboard"

    def __init__(self, db, owner_id, time_range: str = DEFAULT_TIME_RANGE, today=None):
        super().__init__(db, owner_id, today)
        if time_range not in TIME_RANGES:
            raise ValueError(f"time_range must be one of: {', '.join(TIME_RANGES)}")
        self.time_range = time_range
        self.start_date = first_of_month_back(self.today, TIME_RANGES[time_range])

    def _owned_appliances(self, *columns):
        return (
            select(*columns)
            .select_from(Appliance)
            .join(Property, Appliance.property_id == Property.id)
            .where(Property.user_id == self.owner_id)
        )

    def _owned_maintenance(self, *columns):
        return (
            select(*columns)
            .select_from(MaintenanceRecord)
            .join(Appliance, MaintenanceRecord.appliance_id == Appliance.id)
            .join(Property, Appliance.property_id == Property.id)
            .where(Property.user_id == self.owner_id)
        )

    async def _overview(self) -> Dict[str, Any]:
        total_properties = await self.db.scalar(
            select(func.count(Property.id)).where(Property.user_id == self.owner_id)
        )

        appliance_row = (await self.db.execute(self._owned_appliances(
            func.count(Appliance.id),
            func.count(case((Appliance.status.in_(BROKEN_STATUSES), 1))),
        ))).one()

        issue_row = (await self.db.execute(
            select(
                func.count(Issue.id),
                func.count(case((Issue.urgency == IssueUrgency.CRITICAL, 1))),
            )
            .select_from(Issue)
            .join(Appliance, Issue.appliance_id == Appliance.id)
            .join(Property, Appliance.property_id == Property.id)
            .where(Property.user_id == self.owner_id, Issue.status.in_(ACTIVE_ISSUE_STATUSES))
        )).one()

        paid = (MaintenanceRecord.cost.isnot(None)) & (MaintenanceRecord.cost > 0)
        maintenance_row = (await self.db.execute(
            self._owned_maintenance(
                func.count(MaintenanceRecord.id),
                func.coalesce(func.sum(func.coalesce(MaintenanceRecord.cost, 0)), 0),
                func.count(case((paid, 1))),
                func.coalesce(func.sum(case((paid, MaintenanceRecord.cost), else_=0)), 0),
            ).where(MaintenanceRecord.maintenance_date >= self.start_date)
        )).one()

        overdue = await self.db.scalar(
            self._owned_maintenance(func.count(MaintenanceRecord.id)).where(
                MaintenanceRecord.next_due_date.isnot(None),
                MaintenanceRecord.next_due_date < self.today,
            )
        )
        upcoming = await self.db.scalar(
            self._owned_maintenance(func.count(MaintenanceRecord.id)).where(
                MaintenanceRecord.next_due_date.isnot(None),
                MaintenanceRecord.next_due_date >= self.today,
                MaintenanceRecord.next_due_date <= self.today + timedelta(days=UPCOMING_WINDOW_DAYS),
            )
        )

        total_appliances, broken = to_int(appliance_row[0]), to_int(appliance_row[1])
        open_issues, critical = to_int(issue_row[0]), to_int(issue_row[1])
        record_count, total_cost, paid_count, paid_cost = maintenance_row
        paid_count = to_int(paid_count)
        overdue = to_int(overdue)

        return {
            "total_properties": to_int(total_properties),
            "total_appliances": total_appliances,
            "broken_appliances": broken,
            "open_issues": open_issues,
            "critical_issues": critical,
            "total_maintenance_records": to_int(record_count),
            "total_maintenance_cost": to_float(total_cost),
            "average_cost_per_maintenance": to_float(paid_cost) / paid_count if paid_count else 0.0,
            "overdue_maintenance_count": overdue,
            "upcoming_maintenance_count": to_int(upcoming),
            "items_needing_attention": broken + open_issues + overdue,
        }

    async def _recent_maintenance(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            self._owned_maintenance(
                MaintenanceRecord.id,
                Appliance.name.label("appliance_name"),
                Property.address.label("property_address"),
                MaintenanceRecord.maintenance_type,
                MaintenanceRecord.cost,
                MaintenanceRecord.maintenance_date,
                MaintenanceRecord.status,
            )
            .order_by(
                MaintenanceRecord.maintenance_date.desc(),
                MaintenanceRecord.created_at.desc(),
                MaintenanceRecord.id.desc(),
            )
            .limit(10)
        )
        return [
            {
                "id": row["id"],
                "appliance_name": row["appliance_name"],
                "property_address": row["property_address"],
                "maintenance_type": row["maintenance_type"].value,
                "cost": to_float(row["cost"]),
                "maintenance_date": row["maintenance_date"],
                "status": row["status"].value,
            }
            for row in result.mappings()
        ]

    async def _expensive_appliances(self) -> List[Dict[str, Any]]:
        paid = (MaintenanceRecord.cost.isnot(None)) & (MaintenanceRecord.cost > 0)
        total_cost = func.coalesce(func.sum(func.coalesce(MaintenanceRecord.cost, 0)), 0)
        paid_count = func.count(case((paid, 1)))

        result = await self.db.execute(
            self._owned_appliances(
                Appliance.name.label("appliance_name"),
                Property.address.label("property_address"),
                total_cost.label("total_maintenance_cost"),
                paid_count.label("maintenance_count"),
            )
            .outerjoin(
                MaintenanceRecord,
                (MaintenanceRecord.appliance_id == Appliance.id)
                & (MaintenanceRecord.maintenance_date >= self.start_date),
            )
            .group_by(Appliance.id, Appliance.name, Property.address)
            .having(paid_count > 0)
            .order_by(total_cost.desc(), Appliance.id)
            .limit(10)
        )
        return [
            {
                "appliance_name": row["appliance_name"],
                "property_address": row["property_address"],
                "total_maintenance_cost": to_float(row["total_maintenance_cost"]),
                "maintenance_count": to_int(row["maintenance_count"]),
            }
            for row in result.mappings()
        ]

    async def _properties_needing_attention(self) -> List[Dict[str, Any]]:
        open_issues = func.count(distinct(Issue.id))
        critical_issues = func.count(distinct(case((Issue.urgency == IssueUrgency.CRITICAL, Issue.id))))
        overdue = func.count(distinct(MaintenanceRecord.id))

        result = await self.db.execute(
            select(
                Property.address.label("property_address"),
                open_issues.label("open_issues_count"),
                critical_issues.label("critical_issues_count"),
                overdue.label("overdue_maintenance_count"),
            )
            .select_from(Property)
            .outerjoin(Appliance, Appliance.property_id == Property.id)
            .outerjoin(
                Issue,
                (Issue.appliance_id == Appliance.id) & Issue.status.in_(ACTIVE_ISSUE_STATUSES),
            )
            .outerjoin(
                MaintenanceRecord,
                (MaintenanceRecord.appliance_id == Appliance.id)
                & (MaintenanceRecord.next_due_date < self.today),
            )
            .where(Property.user_id == self.owner_id)
            .group_by(Property.id, Property.address)
            .having((open_issues > 0) | (overdue > 0))
            .order_by(critical_issues.desc(), (open_issues + overdue).desc(), Property.id)
            .limit(5)
        )
        rows = []
        for row in result.mappings():
            open_count = to_int(row["open_issues_count"])
            overdue_count = to_int(row["overdue_maintenance_count"])
            rows.append({
                "property_address": row["property_address"],
                "open_issues_count": open_count,
                "critical_issues_count": to_int(row["critical_issues_count"]),
                "overdue_maintenance_count": overdue_count,
                "total_issues": open_count + overdue_count,
            })
        return rows

    async def _monthly_spending(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            self._owned_maintenance(MaintenanceRecord.maintenance_date, MaintenanceRecord.cost)
            .where(MaintenanceRecord.maintenance_date >= self.start_date)
            .order_by(MaintenanceRecord.maintenance_date)
        )

        months: "OrderedDict[tuple, Dict[str, Any]]" = OrderedDict()
        for maintenance_date, cost in result.all():
            key = (maintenance_date.year, maintenance_date.month)
            bucket = months.setdefault(key, {
                "month": maintenance_date.strftime("%b %Y"),
                "total_cost": 0.0,
                "maintenance_count": 0,
            })
            bucket["total_cost"] += to_float(cost)
            if cost is not None and cost > 0:
                bucket["maintenance_count"] += 1

        return list(months.values())[-6:]

    async def fetch(self) -> Dict[str, Any]:
        return {
            "time_range": self.time_range,
            "overview": await self._overview(),
            "recent_maintenance": await self._recent_maintenance(),
            "expensive_appliances": await self._expensive_appliances(),
            "properties_needing_attention": await self._properties_needing_attention(),
            "monthly_spending": await self._monthly_spending(),
        }
