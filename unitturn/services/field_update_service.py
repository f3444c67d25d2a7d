# unitturn/services/field_update_service.py
import math
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, List, Sequence

from unitturn.domain.unit_turn_template import TemplateItem, UnitTurnTemplate
from unitturn.logger import get_logger
from unitturn.services.calculation_service import compute_item_total, recalculate_template

logger = get_logger(__name__)

EDITABLE_FIELDS = frozenset({
    "quantity",
    "cost_per_unit",
    "description",
    "notes",
    "damages",
    "cost_code",
    "units",
    "area",
})
# edits to these refresh item.total in the same step
TOTAL_TRIGGER_FIELDS = frozenset({"quantity", "cost_per_unit"})


@dataclass(frozen=True)
class FieldUpdateResult:
    items: List[TemplateItem]
    matched: bool


def apply_field_update(
    items: Sequence[TemplateItem],
    item_id: str,
    field: str,
    value: Any,
) -> FieldUpdateResult:
    '''
    Set one field on the item with the given id and return a new collection.

    Items other than the target are passed through untouched. When the
    field is quantity or cost_per_unit the target's total is recomputed
    from the updated values before it is returned.

    :param items: Current item collection
    :param item_id: Id of the item to edit
    :param field: Field to set, must be one of EDITABLE_FIELDS
    :param value: New value, assumed to be well typed
    :return: New collection plus whether any item matched item_id
    :rtype: FieldUpdateResult
    '''
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Field '{field}' is not editable")

    matched = False
    new_items = []
    for item in items:
        if item.id != item_id:
            new_items.append(item)
            continue

        matched = True
        updated = replace(item, **{field: value})
        if field in TOTAL_TRIGGER_FIELDS:
            updated.total = compute_item_total(updated)
        new_items.append(updated)

    return FieldUpdateResult(items=new_items, matched=matched)


def update_item_field(
    items: Sequence[TemplateItem],
    item_id: str,
    field: str,
    value: Any,
) -> List[TemplateItem]:
    '''
    Same as apply_field_update but returns only the collection.
    An unknown item_id is a no-op: the items come back unchanged.
    '''
    result = apply_field_update(items, item_id, field, value)
    if not result.matched:
        logger.warning("Field update ignored, item not found: item_id=%s field=%s", item_id, field)
    return result.items


def update_template_field(
    template: UnitTurnTemplate,
    item_id: str,
    field: str,
    value: Any,
) -> UnitTurnTemplate:
    '''Apply one field edit inside a template and refresh its derived totals.'''
    matched = False
    sections = []
    for section in template.sections:
        result = apply_field_update(section.items, item_id, field, value)
        matched = matched or result.matched
        sections.append(replace(section, items=result.items))

    if not matched:
        logger.warning("Field update ignored, item not found: item_id=%s field=%s", item_id, field)
    return recalculate_template(replace(template, sections=sections))


def validate_field(field: str, value: Any) -> bool:
    '''
    Shape check for a single edit before it reaches update_item_field.
    quantity / cost_per_unit / damages must be non-negative numbers,
    cost_code a positive integer, description / notes strings.
    '''
    if field in ("quantity", "cost_per_unit", "damages"):
        return _is_number(value) and value >= 0
    if field in ("description", "notes"):
        return isinstance(value, str)
    if field == "cost_code":
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    return True


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, int)
