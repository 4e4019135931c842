"""
Issue model: a problem reported against an appliance.
"""

from sqlalchemy import String, Text, Integer, Date, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from landlord_api.database import Base, UpdatedAtMixin
from landlord_api.models.user import enum_values
from datetime import date
import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from landlord_api.models.appliance import Appliance


class IssueUrgency(str, enum.Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueStatus(str, enum.Enum):
    OPEN = "open"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


ACTIVE_ISSUE_STATUSES = (IssueStatus.OPEN, IssueStatus.SCHEDULED, IssueStatus.IN_PROGRESS)


class Issue(UpdatedAtMixin, Base):
    """Reported problem. Resolved automatically by a completed repair."""

    __tablename__ = "issues"

    appliance_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("appliances.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    urgency: Mapped[IssueUrgency] = mapped_column(
        SQLEnum(IssueUrgency, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=IssueUrgency.MEDIUM,
        index=True
    )

    status: Mapped[IssueStatus] = mapped_column(
        SQLEnum(IssueStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=IssueStatus.OPEN,
        index=True
    )

    reported_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        default=date.today
    )

    reported_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )

    scheduled_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    resolved_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    resolution_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    maintenance_record_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("maintenance_records.id", ondelete="SET NULL"),
        nullable=True
    )

    appliance: Mapped["Appliance"] = relationship(
        "Appliance",
        back_populates="issues",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Issue(id={self.id}, title={self.title[:30]}, status={self.status})>"

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_ISSUE_STATUSES

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "appliance_id": self.appliance_id,
            "title": self.title,
            "description": self.description,
            "urgency": self.urgency.value,
            "status": self.status.value,
            "reported_date": self.reported_date,
            "reported_by": self.reported_by,
            "scheduled_date": self.scheduled_date,
            "resolved_date": self.resolved_date,
            "resolution_notes": self.resolution_notes,
            "maintenance_record_id": self.maintenance_record_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
