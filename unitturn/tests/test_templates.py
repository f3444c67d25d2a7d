from decimal import Decimal

import pytest

from unitturn.constants.templates import (
    DEFAULT_CATALOG,
    DEFAULT_ITEM_SECTIONS,
    DEFAULT_SECTION_NAMES,
    DEFAULT_TEMPLATE_NAME,
    UNIT_OPTIONS,
    create_default_template,
)
from unitturn.domain.unit_turn_template import TemplateItem, to_decimal


def test_default_template_shape():
    template = create_default_template()
    assert template.name == DEFAULT_TEMPLATE_NAME
    assert len(template.sections) == 22
    assert len(template.all_items()) == 253
    assert template.sections[0].name == "Exterior (Building)"
    assert template.sections[-1].name == "CAP-X - Over $1,000"


def test_default_template_is_zeroed():
    template = create_default_template()
    for item in template.iter_items():
        assert item.quantity == Decimal("0")
        assert item.cost_per_unit == Decimal("0")
        assert item.total == Decimal("0")
        assert item.damages == Decimal("0")
        assert item.photos == []
        assert item.description == item.area
        assert item.units in UNIT_OPTIONS
    assert template.grand_total_project_cost == 0
    assert template.grand_total_damage_charges == 0


def test_catalog_defaults_carried_into_items():
    items = {item.id: item for item in create_default_template().iter_items()}
    assert items["ext-build-1"].cost_code == 16
    assert items["ext-build-1"].description == "Main Body Paint T.U"
    assert items["int-gen-4"].units == "ea"
    assert items["garage-1"].notes == "GDO Remotes?"
    assert items["kitchen-1"].units == "ls"


def test_each_call_returns_an_independent_template():
    first = create_default_template()
    second = create_default_template()
    first.sections[0].items[0].quantity = Decimal("3")
    first.sections[0].items[0].photos.append("photo://1")
    assert second.sections[0].items[0].quantity == 0
    assert second.sections[0].items[0].photos == []


def test_item_section_index_matches_catalog():
    assert DEFAULT_SECTION_NAMES == tuple(s.name for s in DEFAULT_CATALOG)
    assert DEFAULT_ITEM_SECTIONS["kitchen-1"] == "Kitchen & Nook"
    assert DEFAULT_ITEM_SECTIONS["ext-build-2"] == "Exterior (Building)"
    assert len(DEFAULT_ITEM_SECTIONS) == 253


def test_bool_amounts_are_rejected():
    with pytest.raises(ValueError):
        to_decimal(True)
    with pytest.raises(ValueError):
        TemplateItem(id="x", cost_code=6, area="a", description="a", quantity=False)
    assert to_decimal("2.50") == Decimal("2.50")
