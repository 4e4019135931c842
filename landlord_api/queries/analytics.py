"""
Financial analytics: month-by-month performance and yearly per-property scorecards.
"""

from sqlalchemy import select, func, extract, distinct, case
from typing import Any, Dict, List, Optional

from landlord_api.models.appliance import Appliance
from landlord_api.models.maintenance import MaintenanceRecord, MaintenanceStatus
from landlord_api.models.property import Property
from landlord_api.models.rent_payment import RentPayment
from landlord_api.queries.base import OwnerQuery
from landlord_api.queries.classifiers import (
    classify_maintenance_category,
    classify_payment_status,
    classify_performance,
    maintenance_to_rent_ratio,
    months_before,
    occupancy_rate,
    to_float,
    to_int,
    to_optional_float,
    year_bounds,
)

MIN_ANALYTICS_YEAR = 2000


class MonthlyAnalyticsQuery(OwnerQuery):
    """
    Twelve rows per owned property (months 1..12 of ``year``), ordered by
    property then month:

        property_id, property_address, month (int), year (int),
        rent_collected (float, amount + late fees), maintenance_cost (float,
        completed records only), net_income (float), payments_count (int),
        maintenance_count (int), expected_rent (float)
    """

    name = "monthly_analytics"

    def __init__(self, db, owner_id, year: Optional[int] = None, property_id: Optional[int] = None, today=None):
        super().__init__(db, owner_id, today)
        self.year = year if year is not None else self.today.year
        if not MIN_ANALYTICS_YEAR <= self.year <= self.today.year + 1:
            raise ValueError(f"year must be between {MIN_ANALYTICS_YEAR} and {self.today.year + 1}")
        if property_id is not None and property_id <= 0:
            raise ValueError("property_id must be a positive integer")
        self.property_id = property_id

    async def _properties(self):
        query = select(Property.id, Property.address, Property.monthly_rent).where(
            Property.user_id == self.owner_id
        )
        if self.property_id is not None:
            query = query.where(Property.id == self.property_id)
        result = await self.db.execute(query.order_by(Property.address, Property.id))
        return result.all()

    async def _monthly_rent(self, property_ids):
        start, end = year_bounds(self.year)
        month = extract("month", RentPayment.payment_date)
        result = await self.db.execute(
            select(
                RentPayment.property_id,
                month.label("month"),
                func.sum(RentPayment.amount + func.coalesce(RentPayment.late_fee_amount, 0)),
                func.count(RentPayment.id),
            )
            .where(
                RentPayment.property_id.in_(property_ids),
                RentPayment.payment_date >= start,
                RentPayment.payment_date < end,
            )
            .group_by(RentPayment.property_id, month)
        )
        return {(row[0], int(row[1])): (row[2], row[3]) for row in result.all()}

    async def _monthly_maintenance(self, property_ids):
        start, end = year_bounds(self.year)
        month = extract("month", MaintenanceRecord.maintenance_date)
        result = await self.db.execute(
            select(
                Appliance.property_id,
                month.label("month"),
                func.sum(func.coalesce(MaintenanceRecord.cost, 0)),
                func.count(MaintenanceRecord.id),
            )
            .select_from(MaintenanceRecord)
            .join(Appliance, MaintenanceRecord.appliance_id == Appliance.id)
            .where(
                Appliance.property_id.in_(property_ids),
                MaintenanceRecord.status == MaintenanceStatus.COMPLETED,
                MaintenanceRecord.maintenance_date >= start,
                MaintenanceRecord.maintenance_date < end,
            )
            .group_by(Appliance.property_id, month)
        )
        return {(row[0], int(row[1])): (row[2], row[3]) for row in result.all()}

    async def fetch(self) -> List[Dict[str, Any]]:
        properties = await self._properties()
        if not properties:
            return []

        property_ids = [prop.id for prop in properties]
        rent = await self._monthly_rent(property_ids)
        maintenance = await self._monthly_maintenance(property_ids)

        rows = []
        for prop in properties:
            for month in range(1, 13):
                collected, payments = rent.get((prop.id, month), (0, 0))
                cost, records = maintenance.get((prop.id, month), (0, 0))
                rows.append({
                    "property_id": prop.id,
                    "property_address": prop.address,
                    "month": month,
                    "year": self.year,
                    "rent_collected": to_float(collected),
                    "maintenance_cost": to_float(cost),
                    "net_income": to_float(collected) - to_float(cost),
                    "payments_count": to_int(payments),
                    "maintenance_count": to_int(records),
                    "expected_rent": to_float(prop.monthly_rent),
                })

        self._log(rows)
        return rows


class PropertyAnalyticsQuery(OwnerQuery):
    """
    One scorecard per owned property for the current calendar year, ordered
    by net_income then total_rent_collected, both descending:

        property_id, property_address, monthly_rent, total_rent_collected,
        total_late_fees, months_with_payments, expected_yearly_rent,
        last_payment_date, total_maintenance_cost, maintenance_count,
        recent_maintenance_cost, maintenance_to_rent_ratio, net_income,
        occupancy_rate, maintenance_category, performance_rating,
        payment_status

    expected_yearly_rent is only counted for properties with at least one
    payment this year, so a property with no payments rates as no_data.
    """

    name = "property_analytics"

    async def _rent_by_property(self, start, end):
        month = extract("month", RentPayment.payment_date)
        result = await self.db.execute(
            select(
                RentPayment.property_id,
                func.sum(RentPayment.amount + func.coalesce(RentPayment.late_fee_amount, 0)).label("collected"),
                func.sum(func.coalesce(RentPayment.late_fee_amount, 0)).label("late_fees"),
                func.count(distinct(month)).label("months"),
                func.max(RentPayment.payment_date).label("last_payment_date"),
            )
            .select_from(RentPayment)
            .join(Property, RentPayment.property_id == Property.id)
            .where(
                Property.user_id == self.owner_id,
                RentPayment.payment_date >= start,
                RentPayment.payment_date < end,
            )
            .group_by(RentPayment.property_id)
        )
        return {row["property_id"]: row for row in result.mappings()}

    async def _maintenance_by_property(self, start, end):
        recent_start = months_before(self.today, 6)
        recent = case(
            (MaintenanceRecord.maintenance_date >= recent_start, func.coalesce(MaintenanceRecord.cost, 0)),
            else_=0,
        )
        result = await self.db.execute(
            select(
                Appliance.property_id,
                func.sum(func.coalesce(MaintenanceRecord.cost, 0)).label("cost"),
                func.count(MaintenanceRecord.id).label("count"),
                func.sum(recent).label("recent_cost"),
            )
            .select_from(MaintenanceRecord)
            .join(Appliance, MaintenanceRecord.appliance_id == Appliance.id)
            .join(Property, Appliance.property_id == Property.id)
            .where(
                Property.user_id == self.owner_id,
                MaintenanceRecord.status == MaintenanceStatus.COMPLETED,
                MaintenanceRecord.maintenance_date >= start,
                MaintenanceRecord.maintenance_date < end,
            )
            .group_by(Appliance.property_id)
        )
        return {row["property_id"]: row for row in result.mappings()}

    async def fetch(self) -> List[Dict[str, Any]]:
        start, end = year_bounds(self.today.year)
        properties = (await self.db.execute(
            select(Property.id, Property.address, Property.monthly_rent)
            .where(Property.user_id == self.owner_id)
        )).all()
        rent = await self._rent_by_property(start, end)
        maintenance = await self._maintenance_by_property(start, end)

        rows = []
        for prop in properties:
            rent_row = rent.get(prop.id)
            maintenance_row = maintenance.get(prop.id)

            collected = to_float(rent_row["collected"]) if rent_row else 0.0
            last_payment_date = rent_row["last_payment_date"] if rent_row else None
            expected = to_float(prop.monthly_rent) * 12 if rent_row else 0.0
            cost = to_float(maintenance_row["cost"]) if maintenance_row else 0.0

            ratio = maintenance_to_rent_ratio(cost, prop.monthly_rent)
            rate = occupancy_rate(collected, expected)

            rows.append({
                "property_id": prop.id,
                "property_address": prop.address,
                "monthly_rent": to_optional_float(prop.monthly_rent),
                "total_rent_collected": collected,
                "total_late_fees": to_float(rent_row["late_fees"]) if rent_row else 0.0,
                "months_with_payments": to_int(rent_row["months"]) if rent_row else 0,
                "expected_yearly_rent": expected,
                "last_payment_date": last_payment_date,
                "total_maintenance_cost": cost,
                "maintenance_count": to_int(maintenance_row["count"]) if maintenance_row else 0,
                "recent_maintenance_cost": to_float(maintenance_row["recent_cost"]) if maintenance_row else 0.0,
                "maintenance_to_rent_ratio": ratio,
                "net_income": collected - cost,
                "occupancy_rate": rate,
                "maintenance_category": classify_maintenance_category(ratio),
                "performance_rating": classify_performance(rate),
                "payment_status": classify_payment_status(last_payment_date, self.today),
            })

        rows.sort(key=lambda row: (-row["net_income"], -row["total_rent_collected"], row["property_id"]))
        self._log(rows)
        return rows
