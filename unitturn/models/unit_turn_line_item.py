# unitturn/models/unit_turn_line_item.py
from typing import Optional
from sqlalchemy import String, Numeric, Integer, Text
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column

from unitturn.db.base import Base
from unitturn.models.mixins.base_record import BaseRecordMixin

class UnitTurnLineItem(Base, BaseRecordMixin):
    """
    Persisted active template item of a unit turn.
    Only items with quantity > 0 or damage_amount > 0 are ever stored.
    """

    __tablename__ = "unit_turn_line_items"

    unit_turn_instance_id :Mapped[str] = mapped_column(String(36), nullable=False, index=True, comment="Owning UnitTurnInstance ID")
    template_item_id :Mapped[Optional[str]] = mapped_column(String(64), nullable=True, comment="Catalog item id the line came from")

    # =========
    # 🔤 Classification
    # =========
    cost_code :Mapped[int] = mapped_column(Integer, nullable=False, comment="Accounting cost code")
    section_name :Mapped[str] = mapped_column(String(255), nullable=False, comment="Template section name")
    description :Mapped[str] = mapped_column(String(255), nullable=False, comment="Line description")
    area_context :Mapped[Optional[str]] = mapped_column(String(255), nullable=True, comment="Area label")

    # =========
    # 🔢 Quantity & pricing
    # =========
    quantity :Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False, default=Decimal("0"), comment="Quantity, >= 0")
    units :Mapped[str] = mapped_column(String(20), nullable=False, default="ls", comment="Unit of measure")
    cost_per_unit :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"), comment="Unit cost, >= 0")
    line_total :Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True, comment="quantity * cost_per_unit")

    # damages never enter line_total
    damage_amount :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"), comment="Damage charge, >= 0")

    item_notes :Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Notes")
    order_index :Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Display order, >= 0")

    def __repr__(self) -> str:
        return (
            f"<UnitTurnLineItem id={self.id} "
            f"code={self.cost_code} "
            f"line_total={self.line_total} "
            f"damage={self.damage_amount}>"
        )
