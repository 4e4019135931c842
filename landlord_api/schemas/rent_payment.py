"""
Pydantic schemas for rent payments.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


def _clean(v):
    if v is None:
        return None
    return v.strip() or None


class RentPaymentCreate(BaseModel):
    """Record a rent payment against an owned property."""

    property_id: int = Field(..., gt=0)
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, examples=[1450.00])
    payment_date: date
    due_date: Optional[date] = None
    payment_method: Optional[str] = Field(None, max_length=50, examples=["bank_transfer"])
    reference_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    status: str = Field("paid", max_length=20)
    late_fee_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)

    @field_validator("payment_method", "reference_number", "notes")
    @classmethod
    def clean_text(cls, v):
        return _clean(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if not v or not v.strip():
            return "paid"
        return v.strip()


class RentPaymentUpdate(BaseModel):
    """Partial update; property_id cannot be changed."""

    amount: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    payment_date: Optional[date] = None
    due_date: Optional[date] = None
    payment_method: Optional[str] = Field(None, max_length=50)
    reference_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    status: Optional[str] = Field(None, max_length=20)
    late_fee_amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("payment_method", "reference_number", "notes")
    @classmethod
    def clean_text(cls, v):
        return _clean(v)

    @model_validator(mode="after")
    def validate_required_columns(self):
        for field in ("amount", "payment_date", "status", "late_fee_amount"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class RentPaymentResponse(BaseModel):
    id: int
    property_id: int
    amount: float
    payment_date: date
    due_date: Optional[date] = None
    payment_method: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    status: str
    late_fee_amount: float = 0.0
    created_at: Optional[datetime] = None


class RentPaymentListItem(RentPaymentResponse):
    property_address: str
