# unitturn/models/unit_turn_instance.py
from typing import Optional
from sqlalchemy import String, Numeric, DateTime, Enum, Text
from decimal import Decimal
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column

from unitturn.db.base import Base
from unitturn.db.enums import UnitTurnStatus
from unitturn.models.mixins.base_record import BaseRecordMixin

DEFAULT_TEMPLATE_NAME = "Standard Unit Turn Template"

class UnitTurnInstance(Base, BaseRecordMixin):
    """
    One unit-turn workflow run for a property.

    total_project_cost and total_damage_charges are snapshots pushed by the
    calculation core on save; they are kept in separate columns and never
    summed into each other.
    """

    __tablename__ = "unit_turn_instances"

    # =========
    # 🔗 Ownership
    # =========
    property_id :Mapped[str] = mapped_column(String(36), nullable=False, comment="Property UUID")
    community_id :Mapped[str] = mapped_column(String(36), nullable=False, comment="Community UUID")
    created_by :Mapped[Optional[str]] = mapped_column(String(36), nullable=True, comment="Operator who created the instance")

    template_name :Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default=DEFAULT_TEMPLATE_NAME,
        comment="Template the instance was started from",
    )

    # =========
    # 💰 Totals (snapshot, separate ledgers)
    # =========
    total_project_cost :Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
        comment="Sum of quantity * cost_per_unit, damages excluded",
    )
    total_damage_charges :Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
        comment="Sum of damage amounts, tracked apart from project cost",
    )

    # =========
    # 📌 Status & lifecycle
    # =========
    status :Mapped[UnitTurnStatus] = mapped_column(
        Enum(UnitTurnStatus, name="unit_turn_status"),
        nullable=False,
        default=UnitTurnStatus.draft,
        comment="draft -> in_progress -> completed -> exported",
    )
    saved_at :Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, comment="Last save timestamp")
    exported_at :Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, comment="Export timestamp")

    notes :Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Free-text notes")

    def __repr__(self) -> str:
        return (
            f"<UnitTurnInstance id={self.id} "
            f"status={self.status.value if self.status else None} "
            f"project_cost={self.total_project_cost} "
            f"damages={self.total_damage_charges}>"
        )
