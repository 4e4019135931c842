"""
Pydantic schemas for property requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from landlord_api.schemas.appliance import ApplianceResponse


def clean_optional_text(v):
    """Trim optional text; blank becomes None."""
    if v is None:
        return None
    v = v.strip()
    return v or None


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    address: str = Field(
        ...,
        max_length=255,
        description="Street address of the property",
        examples=["12 Harbour Road, Apt 4"]
    )

    property_type: Optional[str] = Field(
        None,
        max_length=100,
        description="Property type such as house, apartment or condo",
        examples=["apartment"]
    )

    monthly_rent: Optional[Decimal] = Field(
        None,
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Expected monthly rent; omit when not set",
        examples=[1450.00]
    )

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        """Validate and clean address."""
        if not v or not v.strip():
            raise ValueError("Address is required")
        return v.strip()

    @field_validator("property_type")
    @classmethod
    def validate_property_type(cls, v):
        return clean_optional_text(v)


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""


class PropertyUpdate(PropertyBase):
    """
    Schema for updating a property. The whole mutable set is replaced, so
    omitting monthly_rent clears it.
    """


class PropertyResponse(BaseModel):
    """Schema for property responses."""

    id: int
    address: str
    property_type: Optional[str] = None
    monthly_rent: Optional[float] = None
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PropertySummary(PropertyResponse):
    """Property list item with its appliance count."""

    appliance_count: int = 0


class PropertyDetailResponse(BaseModel):
    """A property together with its appliances."""

    property: PropertyResponse
    appliances: List[ApplianceResponse]


class MessageResponse(BaseModel):
    message: str
