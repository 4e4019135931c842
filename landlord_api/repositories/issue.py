"""
Issue repository, scoped through appliance and property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update, case, func
from datetime import date
from typing import Dict, Any, List, Optional
import logging

from landlord_api.models.appliance import Appliance
from landlord_api.models.issue import Issue, IssueStatus, IssueUrgency, ACTIVE_ISSUE_STATUSES
from landlord_api.models.property import Property
from landlord_api.models.user import User
from landlord_api.repositories.owned import OwnedRepository
from landlord_api.repositories.appliance import ApplianceRepository

logger = logging.getLogger(__name__)


class IssueRepository(OwnedRepository[Issue]):

    ownership_path = (Issue.appliance, Appliance.property)
    resource_name = "Issue"
    mutable_fields = (
        "title",
        "description",
        "urgency",
        "status",
        "scheduled_date",
        "resolved_date",
        "resolution_notes",
        "maintenance_record_id",
    )

    def __init__(self, db: AsyncSession, owner_id: int):
        super().__init__(Issue, db, owner_id)

    def default_order(self):
        # critical first, then most recently reported
        return (
            case((Issue.urgency == IssueUrgency.CRITICAL, 0), else_=1),
            Issue.reported_date.desc(),
            Issue.created_at.desc(),
            Issue.id.desc(),
        )

    async def create(self, obj_in: Dict[str, Any], commit: bool = True) -> Issue:
        return await self.create_under(ApplianceRepository, obj_in["appliance_id"], obj_in, commit=commit)

    async def list_with_context(
        self,
        appliance_id: Optional[int] = None,
        status: Optional[IssueStatus] = None
    ) -> List[Dict[str, Any]]:
        query = self.scoped(
            Issue,
            Appliance.name.label("appliance_name"),
            Property.address.label("property_address"),
            User.name.label("reported_by_name"),
        ).outerjoin(User, User.id == Issue.reported_by)

        if appliance_id is not None:
            query = query.where(Issue.appliance_id == appliance_id)
        if status is not None:
            query = query.where(Issue.status == status)

        result = await self.db.execute(query.order_by(*self.default_order()))
        issues = []
        for issue, appliance_name, property_address, reported_by_name in result.all():
            row = issue.to_dict()
            row["appliance_name"] = appliance_name
            row["property_address"] = property_address
            row["reported_by_name"] = reported_by_name
            issues.append(row)
        return issues

    async def resolve_active_for_appliance(
        self,
        appliance_id: int,
        maintenance_record_id: int,
        resolved_on: date,
        note: str
    ) -> int:
        """
        Resolve every open, scheduled or in-progress issue on the appliance.

        The note is appended to any existing resolution notes. Runs inside the
        caller's transaction and returns the number of issues resolved.
        """
        appended = case(
            (
                func.coalesce(Issue.resolution_notes, "") != "",
                Issue.resolution_notes + "\n\nAuto-resolved: " + note,
            ),
            else_="Auto-resolved: " + note,
        )
        result = await self.db.execute(
            update(Issue)
            .where(
                Issue.appliance_id == appliance_id,
                Issue.status.in_(ACTIVE_ISSUE_STATUSES),
                Issue.id.in_(self.owned_ids()),
            )
            .values(
                status=IssueStatus.RESOLVED,
                resolved_date=resolved_on,
                resolution_notes=appended,
                maintenance_record_id=maintenance_record_id,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            logger.info(f"Auto-resolved {result.rowcount} issue(s) on appliance {appliance_id}")
        return result.rowcount
