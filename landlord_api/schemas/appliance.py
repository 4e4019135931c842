"""
Pydantic schemas for appliance requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime

from landlord_api.models.appliance import ApplianceStatus


class ApplianceFields(BaseModel):
    """Fields shared by create and update."""

    name: str = Field(..., max_length=100, description="Appliance name", examples=["Dishwasher"])
    type: Optional[str] = Field(None, max_length=50, description="Appliance category", examples=["kitchen"])
    installation_date: Optional[date] = Field(None, description="Date the appliance was installed")
    last_maintenance: Optional[date] = Field(None, description="Date of the most recent maintenance")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        if v is None:
            return None
        return v.strip() or None


class ApplianceCreate(ApplianceFields):
    """Schema for creating an appliance. Status defaults to working."""

    property_id: int = Field(..., gt=0, description="Property the appliance belongs to")
    status: ApplianceStatus = Field(ApplianceStatus.WORKING, description="Operational status")


class ApplianceUpdate(ApplianceFields):
    """
    Schema for updating an appliance. Replaces the mutable set; status must be
    sent explicitly. property_id cannot be changed.
    """

    status: ApplianceStatus = Field(..., description="Operational status")


class ApplianceResponse(BaseModel):
    id: int
    property_id: int
    name: str
    type: Optional[str] = None
    installation_date: Optional[date] = None
    last_maintenance: Optional[date] = None
    status: ApplianceStatus
    created_at: Optional[datetime] = None
