"""
Per-property rent status.
"""

from sqlalchemy import select, func, case
from typing import Any, Dict, List

from landlord_api.models.property import Property
from landlord_api.models.rent_payment import RentPayment
from landlord_api.queries.base import OwnerQuery
from landlord_api.queries.classifiers import (
    DEFAULT_OVERDUE_DAYS,
    classify_rent_status,
    days_between,
    month_bounds,
    to_float,
    to_optional_float,
    year_bounds,
)


class RentStatusQuery(OwnerQuery):
    """
    One row per owned property, ordered by address:

        property_id, property_address, monthly_rent (float | None),
        last_payment_date (date | None), last_payment_amount (float | None),
        total_collected_this_month (float), total_collected_this_year (float),
        days_since_last_payment (int | None), rent_status (str)
    """

    name = "rent_status"

    def __init__(self, db, owner_id, today=None, overdue_days: int = DEFAULT_OVERDUE_DAYS):
        super().__init__(db, owner_id, today)
        self.overdue_days = overdue_days

    def statement(self):
        month_start, month_end = month_bounds(self.today)
        year_start, year_end = year_bounds(self.today.year)

        last_amount = (
            select(RentPayment.amount)
            .where(RentPayment.property_id == Property.id)
            .order_by(RentPayment.payment_date.desc(), RentPayment.id.desc())
            .limit(1)
            .correlate(Property)
            .scalar_subquery()
        )
        this_month = case(
            (
                (RentPayment.payment_date >= month_start) & (RentPayment.payment_date < month_end),
                RentPayment.amount,
            ),
            else_=0,
        )
        this_year = case(
            (
                (RentPayment.payment_date >= year_start) & (RentPayment.payment_date < year_end),
                RentPayment.amount,
            ),
            else_=0,
        )

        return (
            select(
                Property.id.label("property_id"),
                Property.address.label("property_address"),
                Property.monthly_rent,
                func.max(RentPayment.payment_date).label("last_payment_date"),
                last_amount.label("last_payment_amount"),
                func.coalesce(func.sum(this_month), 0).label("total_collected_this_month"),
                func.coalesce(func.sum(this_year), 0).label("total_collected_this_year"),
            )
            .outerjoin(RentPayment, RentPayment.property_id == Property.id)
            .where(Property.user_id == self.owner_id)
            .group_by(Property.id, Property.address, Property.monthly_rent)
            .order_by(Property.address, Property.id)
        )

    async def fetch(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(self.statement())

        rows = []
        for row in result.mappings():
            last_payment_date = row["last_payment_date"]
            rows.append({
                "property_id": row["property_id"],
                "property_address": row["property_address"],
                "monthly_rent": to_optional_float(row["monthly_rent"]),
                "last_payment_date": last_payment_date,
                "last_payment_amount": to_optional_float(row["last_payment_amount"]),
                "total_collected_this_month": to_float(row["total_collected_this_month"]),
                "total_collected_this_year": to_float(row["total_collected_this_year"]),
                "days_since_last_payment": days_between(last_payment_date, self.today),
                "rent_status": classify_rent_status(
                    row["monthly_rent"], last_payment_date, self.today, self.overdue_days
                ),
            })

        self._log(rows)
        return rows
