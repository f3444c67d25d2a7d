from dataclasses import replace
from decimal import Decimal

from unitturn.constants.templates import DEFAULT_SECTION_NAMES, create_default_template
from unitturn.db.enums import UnitTurnStatus
from unitturn.domain.unit_turn_template import TemplateItem, TemplateSection, UnitTurnTemplate
from unitturn.services.calculation_service import (
    build_instance_payload,
    build_line_item_payloads,
    calculate_unit_turn_totals,
    compute_grand_totals,
    compute_item_total,
    compute_section_summary,
    is_active_item,
    merge_items_into_template,
    recalculate_template,
)
from unitturn.services.field_update_service import apply_field_update


def _item(item_id, quantity=0, cost_per_unit=0, damages=0, **kw):
    return TemplateItem(
        id=item_id,
        cost_code=kw.pop("cost_code", 6),
        area=kw.pop("area", item_id),
        description=kw.pop("description", item_id),
        quantity=quantity,
        cost_per_unit=cost_per_unit,
        damages=damages,
        **kw,
    )


def _kitchen(*items):
    return UnitTurnTemplate(
        id="t1",
        name="Kitchen only",
        sections=[TemplateSection(id="kitchen", name="Kitchen", items=list(items))],
    )


def _scenario_a():
    return _kitchen(
        _item("item1", quantity=2, cost_per_unit=50),
        _item("item2", quantity=0, cost_per_unit=100, damages=25),
    )


def _filled_default_template():
    template = create_default_template()
    for n, item in enumerate(template.iter_items()):
        item.quantity = Decimal(n % 3)
        item.cost_per_unit = Decimal("12.50")
        item.damages = Decimal(n % 2)
    return template


# ---------------- item level ----------------

def test_item_total_is_quantity_times_cost():
    assert compute_item_total(_item("a", quantity=3, cost_per_unit=Decimal("19.99"))) == Decimal("59.97")


def test_item_total_ignores_damages():
    assert compute_item_total(_item("a", quantity=1, cost_per_unit=10, damages=500)) == Decimal("10")


def test_float_inputs_keep_decimal_precision():
    item = _item("a", quantity=3, cost_per_unit=0.1)
    assert compute_item_total(item) == Decimal("0.3")


def test_active_item_rules():
    assert not is_active_item(_item("a"))
    assert is_active_item(_item("b", damages=5))
    assert is_active_item(_item("c", quantity=3))
    # a cost without quantity is still a placeholder
    assert not is_active_item(_item("d", cost_per_unit=100))


# ---------------- scenarios ----------------

def test_scenario_a_kitchen_totals():
    template = _scenario_a()
    refreshed = recalculate_template(template)
    item1, item2 = refreshed.sections[0].items
    assert item1.total == Decimal("100")
    assert item2.total == Decimal("0")

    totals = calculate_unit_turn_totals(template.all_items(), template)
    (summary,) = totals.section_summaries
    assert summary.section_name == "Kitchen"
    assert summary.project_total == Decimal("100")
    assert summary.damage_total == Decimal("25")
    assert summary.item_count == 2
    assert totals.total_project_cost == Decimal("100")
    assert totals.total_damage_charges == Decimal("25")
    assert totals.grand_total == Decimal("100")
    assert totals.total_line_items == 2


def test_scenario_b_quantity_edit_moves_only_project_cost():
    template = _scenario_a()
    result = apply_field_update(template.all_items(), "item2", "quantity", 1)
    assert result.matched
    assert result.items[1].total == Decimal("100")

    totals = calculate_unit_turn_totals(result.items, template)
    assert totals.section_summaries[0].project_total == Decimal("200")
    assert totals.total_project_cost == Decimal("200")
    assert totals.total_damage_charges == Decimal("25")
    assert totals.total_line_items == 2


def test_scenario_c_zeroed_template():
    template = create_default_template()
    totals = calculate_unit_turn_totals(template.all_items())
    assert [s.section_name for s in totals.section_summaries] == list(DEFAULT_SECTION_NAMES)
    for summary in totals.section_summaries:
        assert summary.item_count == 0
        assert summary.project_total == 0
        assert summary.damage_total == 0
    assert totals.total_line_items == 0
    assert build_line_item_payloads(template) == []


# ---------------- properties ----------------

def test_damages_never_reach_project_cost():
    template = _filled_default_template()
    before = calculate_unit_turn_totals(template.all_items())

    bumped = [replace(item, damages=item.damages + Decimal("7.25")) for item in template.iter_items()]
    after = calculate_unit_turn_totals(bumped)

    assert after.total_project_cost == before.total_project_cost
    assert after.grand_total == before.grand_total
    assert after.total_damage_charges - before.total_damage_charges == Decimal("7.25") * len(bumped)


def test_section_summaries_add_up_to_totals():
    template = _filled_default_template()
    totals = calculate_unit_turn_totals(template.all_items())
    assert sum(s.project_total for s in totals.section_summaries) == totals.total_project_cost
    assert sum(s.damage_total for s in totals.section_summaries) == totals.total_damage_charges
    assert sum(s.item_count for s in totals.section_summaries) == totals.total_line_items


def test_grand_totals_match_facade():
    template = _filled_default_template()
    grand = compute_grand_totals(template)
    totals = calculate_unit_turn_totals(template.all_items(), template)
    assert grand.grand_total_project_cost == totals.total_project_cost
    assert grand.grand_total_damage_charges == totals.total_damage_charges


def test_stale_cached_total_is_not_trusted():
    stale = _item("a", quantity=2, cost_per_unit=10, total=999)
    summary = compute_section_summary("Kitchen", [stale])
    assert summary.project_total == Decimal("20")


def test_recalculate_refreshes_every_cache_without_mutating_input():
    template = _scenario_a()
    refreshed = recalculate_template(template)
    section = refreshed.sections[0]
    assert section.subtotal == Decimal("100")
    assert section.damage_subtotal == Decimal("25")
    assert refreshed.grand_total_project_cost == Decimal("100")
    assert refreshed.grand_total_damage_charges == Decimal("25")
    # input untouched
    assert template.sections[0].items[0].total == 0
    assert template.grand_total_project_cost == 0


def test_items_outside_the_template_are_left_out(caplog):
    items = [_item("kitchen-1", quantity=1, cost_per_unit=40), _item("not-in-catalog", quantity=5, cost_per_unit=5)]
    totals = calculate_unit_turn_totals(items)
    assert totals.total_project_cost == Decimal("40")
    assert totals.total_line_items == 1
    assert "not-in-catalog" in caplog.text


def test_default_catalog_groups_items_by_id():
    items = [
        _item("kitchen-1", quantity=1, cost_per_unit=40),
        _item("ext-build-1", quantity=2, cost_per_unit=100, damages=10),
    ]
    totals = calculate_unit_turn_totals(items)
    by_name = {s.section_name: s for s in totals.section_summaries}
    assert by_name["Kitchen & Nook"].project_total == Decimal("40")
    assert by_name["Exterior (Building)"].project_total == Decimal("200")
    assert by_name["Exterior (Building)"].damage_total == Decimal("10")
    assert by_name["Garage"].item_count == 0


# ---------------- save payloads ----------------

def test_instance_payload_carries_both_ledgers():
    totals = calculate_unit_turn_totals(_scenario_a().all_items(), _scenario_a())
    payload = build_instance_payload(totals, UnitTurnStatus.completed)
    assert payload == {
        "total_project_cost": Decimal("100"),
        "total_damage_charges": Decimal("25"),
        "status": "completed",
    }


def test_line_item_payloads_skip_placeholders_and_keep_dense_order():
    template = create_default_template()
    items = {item.id: item for item in template.iter_items()}
    items["ext-build-2"].quantity = Decimal("1")
    items["ext-build-2"].cost_per_unit = Decimal("300")
    items["kitchen-1"].damages = Decimal("45")
    items["kitchen-1"].notes = "chipped door"

    payloads = build_line_item_payloads(template)

    assert [p["template_item_id"] for p in payloads] == ["ext-build-2", "kitchen-1"]
    assert [p["order_index"] for p in payloads] == [0, 1]
    assert payloads[0]["section_name"] == "Exterior (Building)"
    assert payloads[0]["area_context"] == "Trim & Door Paint T.U"
    assert "item_notes" not in payloads[0]
    assert payloads[1]["item_notes"] == "chipped door"
    assert payloads[1]["damage_amount"] == Decimal("45")
    assert payloads[1]["quantity"] == 0


def test_merge_items_into_template():
    template = create_default_template()
    edited = [
        _item("kitchen-2", quantity=2, cost_per_unit=75, cost_code=6, description="Counter Tops Repairs"),
        _item("nowhere", quantity=1, cost_per_unit=1),
    ]
    merged = merge_items_into_template(template, edited)

    kitchen = next(s for s in merged.sections if s.name == "Kitchen & Nook")
    assert kitchen.items[1].id == "kitchen-2"
    assert kitchen.items[1].total == Decimal("150")
    assert kitchen.subtotal == Decimal("150")
    assert merged.grand_total_project_cost == Decimal("150")
    assert len(merged.all_items()) == 253


# ---------------- unguarded input ----------------

def test_nan_amount_propagates_into_totals():
    items = [
        _item("a", quantity=float("nan"), cost_per_unit=5),
        _item("b", quantity=2, cost_per_unit=10, damages=3),
    ]
    summary = compute_section_summary("Kitchen", items)
    assert summary.project_total.is_nan()
    assert summary.damage_total == Decimal("3")
    assert summary.item_count == 1


def test_nan_item_is_not_active():
    assert not is_active_item(_item("a", quantity=float("nan")))
    assert not is_active_item(_item("b", damages=Decimal("NaN")))


def test_infinity_times_zero_is_nan():
    assert compute_item_total(_item("a", quantity=float("inf"), cost_per_unit=0)).is_nan()
    assert compute_item_total(_item("b", quantity=float("inf"), cost_per_unit=2)) == Decimal("Infinity")


def test_nan_reaches_facade_totals():
    template = _kitchen(_item("a", quantity=1, cost_per_unit=float("nan")), _item("b", damages=4))
    totals = calculate_unit_turn_totals(template.all_items(), template)
    assert totals.total_project_cost.is_nan()
    assert totals.total_damage_charges == Decimal("4")
    assert totals.total_line_items == 2


def test_negative_amounts_flow_through_unchecked():
    assert compute_item_total(_item("a", quantity=3, cost_per_unit=-10)) == Decimal("-30")

    template = _kitchen(
        _item("a", quantity=-1, cost_per_unit=50),
        _item("b", quantity=2, cost_per_unit=100),
    )
    totals = calculate_unit_turn_totals(template.all_items(), template)
    # a negative quantity is not active, its product still counts
    assert not is_active_item(template.sections[0].items[0])
    assert totals.section_summaries[0].item_count == 1
    assert totals.total_project_cost == Decimal("150")


def test_negative_damages_reduce_damage_total_only():
    template = _kitchen(_item("a", quantity=1, cost_per_unit=20, damages=-5))
    totals = calculate_unit_turn_totals(template.all_items(), template)
    assert totals.total_damage_charges == Decimal("-5")
    assert totals.total_project_cost == Decimal("20")
