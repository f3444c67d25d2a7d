# unitturn/models/line_item_photo.py
from typing import Optional
from sqlalchemy import String, DateTime, Enum, func
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column

from unitturn.db.base import Base
from unitturn.db.enums import PhotoEntityType

class LineItemPhoto(Base):
    """
    Opaque photo reference produced by the capture / upload pipeline.
    Stored as-is; nothing here is used by any calculation.
    """

    __tablename__ = "line_item_photos"

    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Photo record UUID")
    unit_turn_instance_id :Mapped[str] = mapped_column(String(36), nullable=False, index=True, comment="Owning instance ID")
    line_item_id :Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True, comment="Owning line item ID")

    entity_type :Mapped[PhotoEntityType] = mapped_column(
        Enum(PhotoEntityType, name="photo_entity_type"),
        nullable=False,
        default=PhotoEntityType.unit_turn_line_item,
    )

    file_id :Mapped[Optional[str]] = mapped_column(String(255), nullable=True, comment="External file id")
    file_path :Mapped[Optional[str]] = mapped_column(String(1024), nullable=True, comment="Storage path")
    url :Mapped[Optional[str]] = mapped_column(String(2048), nullable=True, comment="Public or local URI")
    caption :Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<LineItemPhoto id={self.id} line_item={self.line_item_id}>"
