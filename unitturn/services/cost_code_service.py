from typing import List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from unitturn.constants.cost_codes import COST_CODES
from unitturn.db.enums import GLClassification
from unitturn.logger import get_logger
from unitturn.models.accounting_cost_code import AccountingCostCode
from unitturn.services.audit_log_service import AuditLogService, SYSTEM_OPERATOR
from unitturn.services.validation_service import validate_gl_classification

logger = get_logger(__name__)

class CostCodeService:
    """
    Keeps the accounting_cost_codes table in line with the static registry.
    """

    def __init__(self, db: Session, audit_log_service: AuditLogService):
        self.db = db
        self.audit_log_service = audit_log_service

    def seed_cost_codes(self) -> int:
        '''
        Insert registry rows missing from the table. Existing rows are left alone.
        :return: number of rows inserted
        '''
        existing = {code for (code,) in self.db.query(AccountingCostCode.code).all()}
        inserted = 0
        for entry in COST_CODES:
            if entry.code in existing:
                continue
            row = AccountingCostCode(
                id=str(uuid4()),
                code=entry.code,
                gl_account_number=entry.gl_account,
                description=entry.description,
                gl_classification=entry.classification,
                is_active=True,
            )
            self.db.add(row)
            self.audit_log_service.record_create(
                unit_turn_instance_id=None,
                entity_type="AccountingCostCode",
                entity_id=row.id,
                operator_id=SYSTEM_OPERATOR,
            )
            inserted += 1

        self.db.flush()
        if inserted:
            logger.info("Seeded %d accounting cost codes", inserted)
        return inserted

    def list_cost_codes(
        self,
        *,
        include_inactive: bool = False,
        classification: Optional[str] = None,
    ) -> List[AccountingCostCode]:
        '''
        :param classification: GL classification label ("UT", "R&M", "Cap Ex"), optional
        '''
        query = self.db.query(AccountingCostCode)
        if classification is not None:
            check = validate_gl_classification(classification)
            if not check.is_valid:
                raise ValueError(check.errors[0])
            query = query.filter(AccountingCostCode.gl_classification == GLClassification.from_label(classification))
        if not include_inactive:
            query = query.filter(AccountingCostCode.is_active.is_(True))
        return query.order_by(AccountingCostCode.code).all()

    def get_by_code(self, code: int) -> Optional[AccountingCostCode]:
        return (
            self.db.query(AccountingCostCode)
            .filter(AccountingCostCode.code == code)
            .first()
        )
