"""
Pydantic schemas for reported appliance issues.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date, datetime

from landlord_api.models.issue import IssueUrgency, IssueStatus


class IssueCreate(BaseModel):
    """Report a new issue. Status always starts as open."""

    appliance_id: int = Field(..., gt=0)
    title: str = Field(..., max_length=255)
    description: str
    urgency: IssueUrgency = IssueUrgency.MEDIUM
    reported_date: Optional[date] = Field(None, description="Defaults to today")

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v.strip()


class IssueUpdate(BaseModel):
    """Partial update of an issue; at least one field must be sent."""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    urgency: Optional[IssueUrgency] = None
    status: Optional[IssueStatus] = None
    scheduled_date: Optional[date] = None
    resolved_date: Optional[date] = None
    resolution_notes: Optional[str] = None
    maintenance_record_id: Optional[int] = None

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v, info):
        if v is not None and not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} cannot be empty")
        return v.strip() if v else v

    @model_validator(mode="after")
    def validate_not_empty(self):
        if not self.model_fields_set:
            raise ValueError("No valid fields to update")
        for field in ("title", "description", "urgency", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class IssueResponse(BaseModel):
    id: int
    appliance_id: int
    title: str
    description: str
    urgency: IssueUrgency
    status: IssueStatus
    reported_date: date
    reported_by: Optional[int] = None
    scheduled_date: Optional[date] = None
    resolved_date: Optional[date] = None
    resolution_notes: Optional[str] = None
    maintenance_record_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class IssueListItem(IssueResponse):
    appliance_name: str
    property_address: str
    reported_by_name: Optional[str] = None
