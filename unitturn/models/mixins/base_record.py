# unitturn/models/mixins/base_record.py
from sqlalchemy import String, DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime

class BaseRecordMixin:
    """
    Shared columns of persisted unit-turn records.

    Invariants:
    - Immutable identity
    - version starts at 1 and only grows, bumped by the service on every update
    """
    # =========
    # Identity
    # =========
    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Record UUID")

    version :Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Optimistic version, > 0",
    )
    # =========
    # ⏱ Timestamps
    # =========
    created_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Creation timestamp"
    )

    updated_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="Last update timestamp"
    )
