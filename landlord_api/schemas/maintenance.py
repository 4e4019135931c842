"""
Pydantic schemas for maintenance records and cost rollups.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from landlord_api.models.appliance import ApplianceStatus
from landlord_api.models.maintenance import MaintenanceType, MaintenanceStatus


def _clean(v):
    if v is None:
        return None
    return v.strip() or None


class MaintenanceCreate(BaseModel):
    """Schema for recording maintenance on an appliance."""

    appliance_id: int = Field(..., gt=0)
    maintenance_type: MaintenanceType
    description: str = Field(..., description="What was done")
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    technician_name: Optional[str] = Field(None, max_length=100)
    technician_company: Optional[str] = Field(None, max_length=100)
    maintenance_date: date
    next_due_date: Optional[date] = None
    notes: Optional[str] = None
    parts_replaced: Optional[str] = None
    warranty_until: Optional[date] = None
    status: MaintenanceStatus = MaintenanceStatus.COMPLETED

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if not v or not v.strip():
            raise ValueError("Description is required")
        return v.strip()

    @field_validator("technician_name", "technician_company", "notes", "parts_replaced")
    @classmethod
    def clean_text(cls, v):
        return _clean(v)


class MaintenanceUpdate(BaseModel):
    """Partial update; only fields present in the payload are written."""

    maintenance_type: Optional[MaintenanceType] = None
    description: Optional[str] = None
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    technician_name: Optional[str] = Field(None, max_length=100)
    technician_company: Optional[str] = Field(None, max_length=100)
    maintenance_date: Optional[date] = None
    next_due_date: Optional[date] = None
    notes: Optional[str] = None
    parts_replaced: Optional[str] = None
    warranty_until: Optional[date] = None
    status: Optional[MaintenanceStatus] = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Description cannot be empty")
        return v.strip() if v else v

    @field_validator("technician_name", "technician_company", "notes", "parts_replaced")
    @classmethod
    def clean_text(cls, v):
        return _clean(v)

    @model_validator(mode="after")
    def validate_required_columns(self):
        """Columns that are NOT NULL may be omitted but not nulled."""
        for field in ("maintenance_type", "description", "maintenance_date", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class MaintenanceResponse(BaseModel):
    id: int
    appliance_id: int
    maintenance_type: MaintenanceType
    description: str
    cost: Optional[float] = None
    technician_name: Optional[str] = None
    technician_company: Optional[str] = None
    maintenance_date: date
    next_due_date: Optional[date] = None
    notes: Optional[str] = None
    parts_replaced: Optional[str] = None
    warranty_until: Optional[date] = None
    status: MaintenanceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MaintenanceListItem(MaintenanceResponse):
    appliance_name: str
    property_address: str


class MaintenanceCostRollup(BaseModel):
    """Per-appliance maintenance spend; zeros when no records exist."""

    appliance_id: int
    appliance_name: str
    property_id: int
    property_address: str
    status: ApplianceStatus
    last_maintenance: Optional[date] = None
    total_maintenance_cost: float = 0.0
    last_maintenance_cost: float = 0.0
    maintenance_count: int = 0
