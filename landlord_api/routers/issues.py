"""
Issue API endpoints for problems reported on appliances.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional

from landlord_api.models.issue import IssueStatus
from landlord_api.services.issue import IssueService
from landlord_api.schemas.issue import IssueCreate, IssueUpdate, IssueResponse, IssueListItem
from landlord_api.schemas.property import MessageResponse
from landlord_api.schemas.error import get_crud_error_responses
from landlord_api.utils.dependencies import get_issue_service


router = APIRouter(prefix="/issues", tags=["Issues"])


@router.post(
    "",
    response_model=IssueResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report issue",
    responses=get_crud_error_responses()
)
async def create_issue(
    issue_data: IssueCreate,
    issue_service: IssueService = Depends(get_issue_service)
) -> IssueResponse:
    issue = await issue_service.create_issue(issue_data)
    return IssueResponse.model_validate(issue.to_dict())


@router.get(
    "",
    response_model=List[IssueListItem],
    summary="List issues",
    description="Critical issues first, then most recently reported",
    responses=get_crud_error_responses()
)
async def list_issues(
    appliance_id: Optional[int] = Query(None, gt=0, description="Only issues on this appliance"),
    issue_status: Optional[IssueStatus] = Query(None, alias="status", description="Only issues in this status"),
    issue_service: IssueService = Depends(get_issue_service)
) -> List[IssueListItem]:
    rows = await issue_service.list_issues(appliance_id=appliance_id, status=issue_status)
    return [IssueListItem.model_validate(row) for row in rows]


@router.get(
    "/{issue_id}",
    response_model=IssueResponse,
    summary="Get issue",
    responses=get_crud_error_responses()
)
async def get_issue(
    issue_id: int = Path(..., description="Issue ID"),
    issue_service: IssueService = Depends(get_issue_service)
) -> IssueResponse:
    issue = await issue_service.get_issue(issue_id)
    return IssueResponse.model_validate(issue.to_dict())


@router.put(
    "/{issue_id}",
    response_model=IssueResponse,
    summary="Update issue",
    description="Only the fields present in the body are changed",
    responses=get_crud_error_responses()
)
async def update_issue(
    issue_data: IssueUpdate,
    issue_id: int = Path(..., description="Issue ID"),
    issue_service: IssueService = Depends(get_issue_service)
) -> IssueResponse:
    issue = await issue_service.update_issue(issue_id, issue_data)
    return IssueResponse.model_validate(issue.to_dict())


@router.delete(
    "/{issue_id}",
    response_model=MessageResponse,
    summary="Delete issue",
    responses=get_crud_error_responses()
)
async def delete_issue(
    issue_id: int = Path(..., description="Issue ID"),
    issue_service: IssueService = Depends(get_issue_service)
) -> MessageResponse:
    await issue_service.delete_issue(issue_id)
    return MessageResponse(message="Issue deleted successfully")
