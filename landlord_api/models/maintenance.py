"""
Maintenance record model: one service event on an appliance.
"""

from sqlalchemy import String, Text, Integer, Numeric, Date, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from landlord_api.database import Base, UpdatedAtMixin
from landlord_api.models.user import enum_values
from landlord_api.models.property import money
from datetime import date
from decimal import Decimal
import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from landlord_api.models.appliance import Appliance


class MaintenanceType(str, enum.Enum):
    ROUTINE = "routine"
    REPAIR = "repair"
    INSPECTION = "inspection"
    REPLACEMENT = "replacement"
    CLEANING = "cleaning"
    UPGRADE = "upgrade"


class MaintenanceStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Completing one of these puts the appliance back in service.
RESTORING_TYPES = (MaintenanceType.REPAIR, MaintenanceType.REPLACEMENT)


class MaintenanceRecord(UpdatedAtMixin, Base):
    """Maintenance performed (or scheduled) on an appliance."""

    __tablename__ = "maintenance_records"

    appliance_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("appliances.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    maintenance_type: Mapped[MaintenanceType] = mapped_column(
        SQLEnum(MaintenanceType, values_callable=enum_values, native_enum=False, length=50),
        nullable=False
    )

    description: Mapped[str] = mapped_column(Text, nullable=False)

    cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=10, scale=2), nullable=True)

    technician_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    technician_company: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    maintenance_date: Mapped[date] = mapped_column(Date, nullable=False)

    next_due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    parts_replaced: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    warranty_until: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    status: Mapped[MaintenanceStatus] = mapped_column(
        SQLEnum(MaintenanceStatus, values_callable=enum_values, native_enum=False, length=50),
        nullable=False,
        default=MaintenanceStatus.COMPLETED
    )

    appliance: Mapped["Appliance"] = relationship(
        "Appliance",
        back_populates="maintenance_records",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<MaintenanceRecord(id={self.id}, appliance_id={self.appliance_id}, type={self.maintenance_type})>"

    @property
    def restores_appliance(self) -> bool:
        return (
            self.maintenance_type in RESTORING_TYPES
            and self.status == MaintenanceStatus.COMPLETED
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "appliance_id": self.appliance_id,
            "maintenance_type": self.maintenance_type.value,
            "description": self.description,
            "cost": money(self.cost),
            "technician_name": self.technician_name,
            "technician_company": self.technician_company,
            "maintenance_date": self.maintenance_date,
            "next_due_date": self.next_due_date,
            "notes": self.notes,
            "parts_replaced": self.parts_replaced,
            "warranty_until": self.warranty_until,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


appliance_date_index = Index(
    "idx_maintenance_appliance_date",
    MaintenanceRecord.appliance_id,
    MaintenanceRecord.maintenance_date.desc()
)
