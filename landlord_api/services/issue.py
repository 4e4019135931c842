"""
Issue service for problems reported against owned appliances.
"""

from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from landlord_api.repositories.issue import IssueRepository
from landlord_api.repositories.maintenance import MaintenanceRepository
from landlord_api.models.issue import Issue, IssueStatus
from landlord_api.schemas.issue import IssueCreate, IssueUpdate
from landlord_api.utils.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)


class IssueService:
    """Report, track and resolve appliance issues for one owner."""

    def __init__(self, db_session: AsyncSession, owner_id: int):
        self.db = db_session
        self.owner_id = owner_id
        self.issue_repo = IssueRepository(db_session, owner_id)

    async def create_issue(self, issue_data: IssueCreate) -> Issue:
        """
        Report an issue. It always starts open and is attributed to the caller.

        Raises:
            NotFoundError: If the appliance does not exist or is not owned
            ValidationError: If the linked maintenance record is for another appliance
        """
        data = issue_data.model_dump()
        data["reported_date"] = data.get("reported_date") or date.today()
        data["status"] = IssueStatus.OPEN
        data["reported_by"] = self.owner_id

        if data.get("maintenance_record_id") is not None:
            await self._check_record_link(data["maintenance_record_id"], data["appliance_id"])

        issue = await self.issue_repo.create(data)
        logger.info(
            f"Issue reported by user {self.owner_id}: '{issue.title}' "
            f"({issue.urgency.value}) on appliance {issue.appliance_id}"
        )
        return issue

    async def list_issues(
        self,
        appliance_id: Optional[int] = None,
        status: Optional[IssueStatus] = None
    ) -> List[Dict[str, Any]]:
        """Critical issues first, then most recently reported."""
        return await self.issue_repo.list_with_context(appliance_id=appliance_id, status=status)

    async def get_issue(self, issue_id: int) -> Issue:
        return await self.issue_repo.get_by_id(issue_id)

    async def update_issue(self, issue_id: int, issue_data: IssueUpdate) -> Issue:
        """
        Partially update an issue.

        Raises:
            NotFoundError: If the issue, or a linked maintenance record, is not owned
            ValidationError: If the linked maintenance record is for another appliance
        """
        values = issue_data.model_dump(exclude_unset=True)

        record_id = values.get("maintenance_record_id")
        if record_id is not None:
            issue = await self.issue_repo.get_by_id(issue_id)
            await self._check_record_link(record_id, issue.appliance_id)

        issue = await self.issue_repo.update(issue_id, values)
        logger.info(f"Issue updated by user {self.owner_id}: {issue_id} ({sorted(values)})")
        return issue

    async def delete_issue(self, issue_id: int) -> None:
        await self.issue_repo.delete(issue_id)
        logger.info(f"Issue deleted by user {self.owner_id}: {issue_id}")

    async def _check_record_link(self, record_id: int, appliance_id: int) -> None:
        """A linked maintenance record must be owned and belong to the issue's appliance."""
        record = await MaintenanceRepository(self.db, self.owner_id).get_by_id(record_id)
        if record.appliance_id != appliance_id:
            raise ValidationError(
                "Maintenance record belongs to a different appliance",
                field_errors=[{
                    "field": "maintenance_record_id",
                    "message": f"Record {record_id} is not for appliance {appliance_id}",
                }]
            )
