from pydantic import BaseModel

from unitturn.models.accounting_cost_code import AccountingCostCode


class CostCodeDTO(BaseModel):
    code: int
    gl_account_number: str
    description: str
    gl_classification: str
    is_active: bool

    @classmethod
    def from_domain_model(cls, row: AccountingCostCode) -> "CostCodeDTO":
        return cls(
            code=row.code,
            gl_account_number=row.gl_account_number,
            description=row.description,
            gl_classification=row.gl_classification.value,
            is_active=bool(row.is_active),
        )
