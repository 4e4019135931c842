"""
Property model for rental units owned by a user.
"""

from sqlalchemy import String, Integer, Numeric, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from landlord_api.database import Base, UpdatedAtMixin
from decimal import Decimal
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from landlord_api.models.user import User
    from landlord_api.models.appliance import Appliance
    from landlord_api.models.rent_payment import RentPayment


def money(value: Optional[Decimal]) -> Optional[float]:
    """Convert a stored decimal to a JSON-friendly float, keeping None."""
    return float(value) if value is not None else None


class Property(UpdatedAtMixin, Base):
    """
    A rental property.

    Deleting a property removes its appliances and rent payments through
    ON DELETE CASCADE foreign keys.
    """

    __tablename__ = "properties"

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Street address"
    )

    property_type: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Free-form type such as house or apartment"
    )

    monthly_rent: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=True,
        comment="Expected monthly rent; null when not set"
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user"
    )

    owner: Mapped["User"] = relationship(
        "User",
        back_populates="properties",
        lazy="raise"
    )

    appliances: Mapped[List["Appliance"]] = relationship(
        "Appliance",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise"
    )

    rent_payments: Mapped[List["RentPayment"]] = relationship(
        "RentPayment",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, address={self.address[:30]}, user_id={self.user_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "address": self.address,
            "property_type": self.property_type,
            "monthly_rent": money(self.monthly_rent),
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


# Owner listing, newest first
owner_created_index = Index(
    "idx_properties_user_created",
    Property.user_id,
    Property.created_at.desc()
)
