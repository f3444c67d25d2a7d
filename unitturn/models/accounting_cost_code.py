# unitturn/models/accounting_cost_code.py
from sqlalchemy import String, Integer, Boolean, Date, Enum, true
from datetime import date
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column

from unitturn.db.base import Base
from unitturn.db.enums import GLClassification
from unitturn.models.mixins.base_record import BaseRecordMixin

class AccountingCostCode(Base, BaseRecordMixin):
    """
    Database copy of the static cost code registry, seeded at start-up.
    """

    __tablename__ = "accounting_cost_codes"

    code :Mapped[int] = mapped_column(Integer, nullable=False, unique=True, comment="Cost code")
    gl_account_number :Mapped[str] = mapped_column(String(20), nullable=False, comment="General ledger account")
    description :Mapped[str] = mapped_column(String(255), nullable=False)
    gl_classification :Mapped[GLClassification] = mapped_column(
        Enum(GLClassification, name="gl_classification"),
        nullable=False,
        comment="UT / R&M / Cap Ex reporting bucket",
    )
    is_active :Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
    effective_date :Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<AccountingCostCode code={self.code} gl={self.gl_account_number}>"
