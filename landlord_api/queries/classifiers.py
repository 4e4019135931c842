"""
Pure classification and arithmetic used by the reporting queries.
Nothing here touches the database.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[int, float, Decimal]

# Rent status values
RENT_NOT_SET = "not_set"
RENT_NO_PAYMENTS = "no_payments"
RENT_OVERDUE = "overdue"
RENT_CURRENT = "current"
RENT_LATE = "late"

DEFAULT_OVERDUE_DAYS = 35


def to_float(value: Optional[Number]) -> float:
    """Decimal/int/None to float, with None counting as zero."""
    if value is None:
        return 0.0
    return float(value)


def to_optional_float(value: Optional[Number]) -> Optional[float]:
    return float(value) if value is not None else None


def to_int(value: Optional[Number]) -> int:
    if value is None:
        return 0
    return int(value)


def days_between(earlier: Optional[date], today: date) -> Optional[int]:
    if earlier is None:
        return None
    return (today - earlier).days


def classify_rent_status(
    monthly_rent: Optional[Number],
    last_payment_date: Optional[date],
    today: date,
    overdue_days: int = DEFAULT_OVERDUE_DAYS
) -> str:
    """
    Classify a property's rent status.

    Checked in order: no rent configured, never paid, last payment more than
    ``overdue_days`` ago, otherwise current.
    """
    if monthly_rent is None:
        return RENT_NOT_SET
    if last_payment_date is None:
        return RENT_NO_PAYMENTS
    if (today - last_payment_date).days > overdue_days:
        return RENT_OVERDUE
    return RENT_CURRENT


def classify_payment_status(last_payment_date: Optional[date], today: date) -> str:
    """Payment recency for analytics: >45 days overdue, >30 days late."""
    if last_payment_date is None:
        return RENT_NO_PAYMENTS
    days = (today - last_payment_date).days
    if days > 45:
        return RENT_OVERDUE
    if days > 30:
        return RENT_LATE
    return RENT_CURRENT


def maintenance_to_rent_ratio(
    maintenance_cost: Number,
    monthly_rent: Optional[Number]
) -> Optional[float]:
    """Yearly maintenance spend over yearly rent, 4 decimal places."""
    if monthly_rent is None or Decimal(str(monthly_rent)) == 0:
        return None
    ratio = Decimal(str(maintenance_cost)) / (Decimal(str(monthly_rent)) * 12)
    return float(ratio.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP))


def occupancy_rate(collected: Number, expected: Number) -> Optional[float]:
    """Collected over expected rent as a percentage, 2 decimal places."""
    if expected is None or Decimal(str(expected)) <= 0:
        return None
    rate = Decimal(str(collected)) / Decimal(str(expected)) * 100
    return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def classify_maintenance_category(ratio: Optional[float]) -> str:
    if ratio is None:
        return "no_data"
    if ratio > 0.3:
        return "high_maintenance"
    if ratio > 0.15:
        return "medium_maintenance"
    return "low_maintenance"


def classify_performance(rate: Optional[float]) -> str:
    if rate is None:
        return "no_data"
    if rate >= 90:
        return "excellent"
    if rate >= 75:
        return "good"
    if rate >= 60:
        return "fair"
    return "poor"


def first_of_month_back(today: date, months_back: int) -> date:
    """First day of the month ``months_back`` months before today's month."""
    month_index = today.year * 12 + (today.month - 1) - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


def month_bounds(today: date):
    """Half-open [start, end) range covering today's month."""
    start = today.replace(day=1)
    return start, first_of_month_back(start, -1)


def year_bounds(year: int):
    return date(year, 1, 1), date(year + 1, 1, 1)


def months_before(today: date, months: int) -> date:
    """Same calendar day ``months`` months earlier, clamped to the month's end."""
    start = first_of_month_back(today, months)
    next_month = first_of_month_back(start, -1)
    last_day = (next_month - start).days
    return start.replace(day=min(today.day, last_day))
