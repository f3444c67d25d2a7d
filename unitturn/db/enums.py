# unitturn/db/enums.py
import enum

# UnitTurnInstance related enums
class UnitTurnStatus(enum.Enum):
    draft = "draft"
    in_progress = "in_progress"
    completed = "completed"
    exported = "exported"

# Cost code related enums
class GLClassification(enum.Enum):
    UT = "UT"          # unit turn
    RM = "R&M"         # repair & maintenance
    CAPEX = "Cap Ex"   # capital expenditure

    @classmethod
    def from_label(cls, label: str) -> "GLClassification":
        for member in cls:
            if member.value == label:
                return member
        raise ValueError(
            f"Invalid GL classification: {label}. "
            f"Must be one of: {', '.join(m.value for m in cls)}"
        )

# Photo related enums
class PhotoEntityType(enum.Enum):
    unit_turn_instance = "unit_turn_instance"
    unit_turn_line_item = "unit_turn_line_item"

# AuditLog related enums
class AuditEntityType(enum.Enum):
    UnitTurnInstance = "unit_turn_instance"
    UnitTurnLineItem = "unit_turn_line_item"
    LineItemPhoto = "line_item_photo"
    AccountingCostCode = "accounting_cost_code"


class AuditAction(enum.Enum):
    create = "create"
    update = "update"
    delete = "delete"
    system = "system"
