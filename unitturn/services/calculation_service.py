# unitturn/services/calculation_service.py
"""
Unit-turn cost calculation.

All functions here are pure: they read items / templates and return new
values, never touching the database or mutating their inputs.

Project cost and damage charges are two separate ledgers. Project cost is
only ever quantity * cost_per_unit; damage charges are only ever the sum of
item damages. Nothing in this module adds the two together.
"""
from dataclasses import replace
from decimal import Decimal, InvalidOperation, getcontext, localcontext
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from unitturn.constants.templates import DEFAULT_ITEM_SECTIONS, DEFAULT_SECTION_NAMES
from unitturn.db.enums import UnitTurnStatus
from unitturn.domain.unit_turn_template import (
    ZERO,
    GrandTotals,
    SectionSummary,
    TemplateItem,
    TemplateSection,
    UnitTurnTemplate,
    UnitTurnTotals,
)
from unitturn.logger import get_logger

logger = get_logger(__name__)


def _unguarded():
    '''
    Decimal context for the core arithmetic. Input is not validated here, so
    invalid operations (NaN amounts, 0 * Infinity) yield NaN instead of raising.
    '''
    ctx = getcontext().copy()
    ctx.traps[InvalidOperation] = False
    return localcontext(ctx)


def _positive(value: Decimal) -> bool:
    return not value.is_nan() and value > 0


def compute_item_total(item: TemplateItem) -> Decimal:
    '''Project-cost contribution of one item. Damages are not part of it.'''
    with _unguarded():
        return item.quantity * item.cost_per_unit


def is_active_item(item: TemplateItem) -> bool:
    '''An item is active (counted and persisted) once it has a positive quantity or damage amount.'''
    return _positive(item.quantity) or _positive(item.damages)


def compute_section_summary(section_name: str, items: Iterable[TemplateItem]) -> SectionSummary:
    '''
    Summarise all items of one section, zeroed placeholders included.
    Totals are recomputed from quantity and cost_per_unit; a cached
    item.total is never trusted.

    :param section_name: Display name of the section
    :type section_name: str
    :param items: Every item of the section
    :type items: Iterable[TemplateItem]
    :rtype: SectionSummary
    '''
    items = list(items)
    with _unguarded():
        return SectionSummary(
            section_name=section_name,
            item_count=sum(1 for item in items if is_active_item(item)),
            project_total=sum((compute_item_total(item) for item in items), ZERO),
            damage_total=sum((item.damages for item in items), ZERO),
        )


def compute_section_totals(section: TemplateSection) -> Tuple[Decimal, Decimal]:
    '''
    :return: (subtotal, damage_subtotal) for the section, recomputed from its items
    '''
    summary = compute_section_summary(section.name, section.items)
    return summary.project_total, summary.damage_total


def compute_grand_totals(template: UnitTurnTemplate) -> GrandTotals:
    '''Sum section subtotals and damage subtotals into two independent grand totals.'''
    project_cost = ZERO
    damage_charges = ZERO
    with _unguarded():
        for section in template.sections:
            subtotal, damage_subtotal = compute_section_totals(section)
            project_cost += subtotal
            damage_charges += damage_subtotal
    return GrandTotals(
        grand_total_project_cost=project_cost,
        grand_total_damage_charges=damage_charges,
    )


def recalculate_template(template: UnitTurnTemplate) -> UnitTurnTemplate:
    '''
    Return a copy of the template whose cached derived fields (item total,
    section subtotal / damage_subtotal, grand totals) are all refreshed.
    '''
    sections = []
    for section in template.sections:
        items = [replace(item, total=compute_item_total(item)) for item in section.items]
        refreshed = replace(section, items=items)
        refreshed.subtotal, refreshed.damage_subtotal = compute_section_totals(refreshed)
        sections.append(refreshed)

    result = replace(template, sections=sections)
    grand = compute_grand_totals(result)
    result.grand_total_project_cost = grand.grand_total_project_cost
    result.grand_total_damage_charges = grand.grand_total_damage_charges
    return result


def section_index(template: UnitTurnTemplate) -> Tuple[Tuple[str, ...], Dict[str, str]]:
    '''
    Section names in template order and an item id -> section name map.
    '''
    names = tuple(dict.fromkeys(section.name for section in template.sections))
    item_sections = {
        item.id: section.name
        for section in template.sections
        for item in section.items
    }
    return names, item_sections


def merge_items_into_template(
    template: UnitTurnTemplate,
    items: Iterable[TemplateItem],
) -> UnitTurnTemplate:
    '''
    Put a flat item collection back into the template's sections.

    Items replace the template item with the same id; template items not in
    the collection keep their current values. Items whose id is not part of
    the template are dropped.

    :return: recalculated copy of the template
    '''
    by_id = {}
    for item in items:
        by_id[item.id] = item

    sections = []
    for section in template.sections:
        merged = [by_id.pop(item.id, item) for item in section.items]
        sections.append(replace(section, items=merged))

    if by_id:
        logger.warning("Items without a template section dropped: %s", list(by_id))

    return recalculate_template(replace(template, sections=sections))


def calculate_unit_turn_totals(
    items: Iterable[TemplateItem],
    template: Optional[UnitTurnTemplate] = None,
) -> UnitTurnTotals:
    '''
    Consolidated totals for a flat item collection.

    Items are grouped back into sections through their id. Without an
    explicit template the default catalog supplies the section order and
    the id -> section map. Every section of the catalog gets a summary,
    in catalog order, even when none of its items is active. Items whose
    id belongs to no section are left out of every total.

    :param items: Items of one live template instance
    :type items: Iterable[TemplateItem]
    :param template: Template whose structure defines the sections, optional
    :type template: Optional[UnitTurnTemplate]
    :rtype: UnitTurnTotals
    '''
    if template is None:
        section_names: Tuple[str, ...] = DEFAULT_SECTION_NAMES
        item_sections: Mapping[str, str] = DEFAULT_ITEM_SECTIONS
    else:
        section_names, item_sections = section_index(template)

    groups: Dict[str, List[TemplateItem]] = {name: [] for name in section_names}
    unassigned = []
    for item in items:
        section_name = item_sections.get(item.id)
        if section_name is None:
            unassigned.append(item.id)
            continue
        groups[section_name].append(item)

    if unassigned:
        logger.warning("Items without a template section ignored in totals: %s", unassigned)

    summaries = [compute_section_summary(name, groups[name]) for name in section_names]

    with _unguarded():
        return UnitTurnTotals(
            total_project_cost=sum((s.project_total for s in summaries), ZERO),
            total_damage_charges=sum((s.damage_total for s in summaries), ZERO),
            section_summaries=summaries,
            total_line_items=sum(s.item_count for s in summaries),
        )


def build_instance_payload(
    totals: UnitTurnTotals,
    status: UnitTurnStatus = UnitTurnStatus.completed,
) -> Dict[str, Any]:
    '''Instance-level record handed to persistence on save.'''
    return {
        "total_project_cost": totals.total_project_cost,
        "total_damage_charges": totals.total_damage_charges,
        "status": status.value,
    }


def build_line_item_payloads(template: UnitTurnTemplate) -> List[Dict[str, Any]]:
    '''
    One record per active item, in template order.
    order_index counts the records emitted so far, so it stays dense even
    though placeholders are skipped.
    '''
    payloads = []
    for section in template.sections:
        for item in section.items:
            if not is_active_item(item):
                continue
            payload = {
                "template_item_id": item.id,
                "cost_code": item.cost_code,
                "section_name": section.name,
                "description": item.description,
                "area_context": item.area,
                "quantity": item.quantity,
                "units": item.units,
                "cost_per_unit": item.cost_per_unit,
                "damage_amount": item.damages,
                "order_index": len(payloads),
            }
            if item.notes:
                payload["item_notes"] = item.notes
            payloads.append(payload)
    return payloads
