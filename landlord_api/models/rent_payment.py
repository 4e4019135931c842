"""
Rent payment model: money received for a property.
"""

from sqlalchemy import String, Text, Integer, Numeric, Date, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from landlord_api.database import Base
from landlord_api.models.property import money
from datetime import date
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from landlord_api.models.property import Property


class RentPayment(Base):
    """A single rent payment. Amount is always positive."""

    __tablename__ = "rent_payments"

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)

    payment_date: Mapped[date] = mapped_column(Date, nullable=False)

    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    reference_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="paid")

    late_fee_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
        default=Decimal("0")
    )

    property: Mapped["Property"] = relationship(
        "Property",
        back_populates="rent_payments",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<RentPayment(id={self.id}, property_id={self.property_id}, amount={self.amount})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "property_id": self.property_id,
            "amount": money(self.amount),
            "payment_date": self.payment_date,
            "due_date": self.due_date,
            "payment_method": self.payment_method,
            "reference_number": self.reference_number,
            "notes": self.notes,
            "status": self.status,
            "late_fee_amount": money(self.late_fee_amount) or 0.0,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


property_payment_date_index = Index(
    "idx_rent_payments_property_date",
    RentPayment.property_id,
    RentPayment.payment_date.desc()
)
