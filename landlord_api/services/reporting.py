"""
Reporting service: rent status, dashboard and financial analytics.
Translates query parameter errors into API validation errors.
"""

from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from landlord_api.config import settings
from landlord_api.queries import (
    DashboardQuery,
    MonthlyAnalyticsQuery,
    PropertyAnalyticsQuery,
    RentStatusQuery,
)
from landlord_api.utils.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)


class ReportingService:
    """Read-only reports over one owner's portfolio."""

    def __init__(self, db_session: AsyncSession, owner_id: int, today: Optional[date] = None):
        self.db = db_session
        self.owner_id = owner_id
        self.today = today

    async def rent_status(self) -> List[Dict[str, Any]]:
        """Per-property rent collection status, ordered by address."""
        return await RentStatusQuery(
            self.db,
            self.owner_id,
            today=self.today,
            overdue_days=settings.rent_overdue_days
        ).fetch()

    async def dashboard(self, time_range: str = "6months") -> Dict[str, Any]:
        """
        Maintenance dashboard for the given window.

        Raises:
            ValidationError: If time_range is not 3months, 6months or 12months
        """
        try:
            query = DashboardQuery(self.db, self.owner_id, time_range=time_range, today=self.today)
        except ValueError as e:
            raise ValidationError(str(e), field_errors=[{"field": "time_range", "message": str(e)}])
        return await query.fetch()

    async def monthly_analytics(
        self,
        year: Optional[int] = None,
        property_id: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Raises:
            ValidationError: If year is out of range or property_id is not positive
        """
        try:
            query = MonthlyAnalyticsQuery(
                self.db,
                self.owner_id,
                year=year,
                property_id=property_id,
                today=self.today
            )
        except ValueError as e:
            raise ValidationError(str(e))
        return await query.fetch()

    async def property_analytics(self) -> List[Dict[str, Any]]:
        """Year-to-date scorecard per property, best net income first."""
        return await PropertyAnalyticsQuery(self.db, self.owner_id, today=self.today).fetch()
