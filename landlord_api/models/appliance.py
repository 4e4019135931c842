"""
Appliance model for equipment installed in a property.
"""

from sqlalchemy import String, Integer, Date, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from landlord_api.database import Base
from landlord_api.models.user import enum_values
from datetime import date
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from landlord_api.models.property import Property
    from landlord_api.models.maintenance import MaintenanceRecord
    from landlord_api.models.issue import Issue


class ApplianceStatus(str, enum.Enum):
    """Operational state of an appliance."""
    WORKING = "working"
    NEEDS_REPAIR = "needs_repair"
    UNDER_REPAIR = "under_repair"
    OUT_OF_SERVICE = "out_of_service"


BROKEN_STATUSES = (ApplianceStatus.NEEDS_REPAIR, ApplianceStatus.OUT_OF_SERVICE)


class Appliance(Base):
    """
    Appliance belonging to a property. Ownership is inherited from the
    property; property_id never changes after creation.
    """

    __tablename__ = "appliances"

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    installation_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    last_maintenance: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    status: Mapped[ApplianceStatus] = mapped_column(
        SQLEnum(ApplianceStatus, values_callable=enum_values, native_enum=False, length=50),
        nullable=False,
        default=ApplianceStatus.WORKING
    )

    property: Mapped["Property"] = relationship(
        "Property",
        back_populates="appliances",
        lazy="raise"
    )

    maintenance_records: Mapped[List["MaintenanceRecord"]] = relationship(
        "MaintenanceRecord",
        back_populates="appliance",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise"
    )

    issues: Mapped[List["Issue"]] = relationship(
        "Issue",
        back_populates="appliance",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Appliance(id={self.id}, name={self.name}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "property_id": self.property_id,
            "name": self.name,
            "type": self.type,
            "installation_date": self.installation_date,
            "last_maintenance": self.last_maintenance,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
