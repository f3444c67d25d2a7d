# unitturn/services/validation_service.py
"""
Runtime validation for unit-turn records, mirroring the database CHECK
constraints (non-negative money, positive versions, known statuses).

The calculation core never validates; these checks run at the service /
API boundary before data is persisted.
"""
import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from unitturn.db.enums import GLClassification, UnitTurnStatus

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
LINE_TOTAL_TOLERANCE = Decimal("0.01")


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))


def validate_unit_turn_status(status: str) -> ValidationResult:
    valid = [s.value for s in UnitTurnStatus]
    if status in valid:
        return ValidationResult(True)
    return ValidationResult(False, [f"Invalid status: {status}. Must be one of: {', '.join(valid)}"])


def validate_gl_classification(classification: str) -> ValidationResult:
    valid = [c.value for c in GLClassification]
    if classification in valid:
        return ValidationResult(True)
    return ValidationResult(
        False,
        [f"Invalid GL classification: {classification}. Must be one of: {', '.join(valid)}"],
    )


def validate_non_negative(value: Any, field_name: str) -> ValidationResult:
    if _is_numeric(value) and value >= 0:
        return ValidationResult(True)
    return ValidationResult(False, [f"{field_name} must be >= 0, got: {value}"])


def validate_positive(value: Any, field_name: str) -> ValidationResult:
    if _is_numeric(value) and value > 0:
        return ValidationResult(True)
    return ValidationResult(False, [f"{field_name} must be > 0, got: {value}"])


def validate_uuid(value: Any, field_name: str) -> ValidationResult:
    if isinstance(value, str) and UUID_RE.match(value):
        return ValidationResult(True)
    return ValidationResult(False, [f"{field_name} must be a valid UUID, got: {value}"])


def combine_validation_results(results: Iterable[ValidationResult]) -> ValidationResult:
    errors: List[str] = []
    for result in results:
        errors.extend(result.errors)
    return ValidationResult.from_errors(errors)


def validate_create_instance_request(request: Dict[str, Any]) -> ValidationResult:
    '''
    :param request: keys property_id, community_id, template_name (optional), notes (optional)
    '''
    results = [
        validate_uuid(request.get("property_id"), "property_id"),
        validate_uuid(request.get("community_id"), "community_id"),
    ]
    template_name = request.get("template_name")
    if template_name is not None and not str(template_name).strip():
        results.append(ValidationResult(False, ["template_name cannot be empty string"]))
    return combine_validation_results(results)


def validate_create_line_item_request(request: Dict[str, Any]) -> ValidationResult:
    '''
    Checks one line-item record before it is inserted.
    damage_amount is optional; every other numeric key is required.
    '''
    errors: List[str] = []
    errors += validate_uuid(request.get("unit_turn_instance_id"), "unit_turn_instance_id").errors

    cost_code = request.get("cost_code")
    if not _is_int(cost_code) or cost_code <= 0:
        errors.append(f"cost_code must be a positive integer, got: {cost_code}")

    if not _non_blank(request.get("section_name")):
        errors.append("section_name is required and cannot be empty")
    if not _non_blank(request.get("description")):
        errors.append("description is required and cannot be empty")

    errors += validate_non_negative(request.get("quantity"), "quantity").errors
    errors += validate_non_negative(request.get("cost_per_unit"), "cost_per_unit").errors
    if request.get("damage_amount") is not None:
        errors += validate_non_negative(request.get("damage_amount"), "damage_amount").errors

    order_index = request.get("order_index")
    if not _is_int(order_index) or order_index < 0:
        errors.append(f"order_index must be a non-negative integer, got: {order_index}")

    return ValidationResult.from_errors(errors)


def validate_instance(instance) -> ValidationResult:
    '''Validate a persisted UnitTurnInstance (or any object with the same attributes).'''
    status = instance.status.value if isinstance(instance.status, UnitTurnStatus) else instance.status
    results = [
        validate_uuid(instance.id, "id"),
        validate_uuid(instance.property_id, "property_id"),
        validate_uuid(instance.community_id, "community_id"),
        validate_unit_turn_status(status),
        validate_non_negative(instance.total_project_cost, "total_project_cost"),
        validate_non_negative(instance.total_damage_charges, "total_damage_charges"),
        validate_positive(instance.version, "version"),
    ]
    if not _non_blank(instance.template_name):
        results.append(ValidationResult(False, ["template_name is required and cannot be empty"]))
    return combine_validation_results(results)


def validate_line_item(item) -> ValidationResult:
    '''
    Validate a persisted UnitTurnLineItem, including that a stored
    line_total still matches quantity * cost_per_unit.
    '''
    errors: List[str] = []
    errors += validate_uuid(item.id, "id").errors
    errors += validate_uuid(item.unit_turn_instance_id, "unit_turn_instance_id").errors

    if not _is_int(item.cost_code) or item.cost_code <= 0:
        errors.append(f"cost_code must be a positive integer, got: {item.cost_code}")
    if not _non_blank(item.section_name):
        errors.append("section_name is required and cannot be empty")
    if not _non_blank(item.description):
        errors.append("description is required and cannot be empty")
    if not _non_blank(item.units):
        errors.append("units is required and cannot be empty")

    errors += validate_non_negative(item.quantity, "quantity").errors
    errors += validate_non_negative(item.cost_per_unit, "cost_per_unit").errors
    errors += validate_non_negative(item.damage_amount, "damage_amount").errors
    errors += validate_positive(item.version, "version").errors

    if not _is_int(item.order_index) or item.order_index < 0:
        errors.append(f"order_index must be a non-negative integer, got: {item.order_index}")

    line_total: Optional[Any] = item.line_total
    if line_total is not None and _is_numeric(item.quantity) and _is_numeric(item.cost_per_unit):
        expected = _dec(item.quantity) * _dec(item.cost_per_unit)
        if abs(_dec(line_total) - expected) > LINE_TOTAL_TOLERANCE:
            errors.append(f"line_total mismatch: expected {expected}, got {line_total}")

    return ValidationResult.from_errors(errors)


def _is_numeric(v) -> bool:
    # NaN / Infinity are never valid amounts
    if isinstance(v, bool):
        return False
    if isinstance(v, Decimal):
        return v.is_finite()
    if isinstance(v, float):
        return math.isfinite(v)
    return isinstance(v, int)


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _non_blank(v) -> bool:
    return isinstance(v, str) and bool(v.strip())


def _dec(v) -> Decimal:
    return v if isinstance(v, Decimal) else Decimal(str(v))
