"""
Read-only aggregation and reporting queries.
Each query is bound to one owner and documents the shape of its rows.
"""

from landlord_api.queries.base import OwnerQuery
from landlord_api.queries.property_summary import PropertySummaryQuery
from landlord_api.queries.rent_status import RentStatusQuery
from landlord_api.queries.maintenance_costs import MaintenanceRollupQuery
from landlord_api.queries.dashboard import DashboardQuery, TIME_RANGES
from landlord_api.queries.analytics import MonthlyAnalyticsQuery, PropertyAnalyticsQuery

__all__ = [
    "OwnerQuery",
    "PropertySummaryQuery",
    "RentStatusQuery",
    "MaintenanceRollupQuery",
    "DashboardQuery",
    "TIME_RANGES",
    "MonthlyAnalyticsQuery",
    "PropertyAnalyticsQuery",
]
