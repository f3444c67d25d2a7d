# unitturn/domain/unit_turn_template.py
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterator, List

ZERO = Decimal("0")


def to_decimal(v) -> Decimal:
    '''Normalise ints / floats / numeric strings to Decimal; None and "" become 0.'''
    if isinstance(v, bool):
        raise ValueError(f"Expected a numeric amount, got bool: {v}")
    if isinstance(v, Decimal):
        return v
    if v is None or v == "":
        return ZERO
    if isinstance(v, float):
        return Decimal(str(v))
    return Decimal(v)


@dataclass
class TemplateItem:
    """
    One costed line of a unit-turn template.

    Invariants:
    - total is derived: quantity * cost_per_unit, refreshed by the calculators
    - damages are tracked separately and never enter total
    """
    id: str
    cost_code: int
    area: str
    description: str
    quantity: Decimal = ZERO
    units: str = "ls"
    cost_per_unit: Decimal = ZERO
    total: Decimal = ZERO
    damages: Decimal = ZERO
    notes: str = ""
    photos: List[Any] = field(default_factory=list)

    def __post_init__(self):
        self.cost_code = int(self.cost_code)
        self.quantity = to_decimal(self.quantity)
        self.cost_per_unit = to_decimal(self.cost_per_unit)
        self.total = to_decimal(self.total)
        self.damages = to_decimal(self.damages)
        if self.notes is None:
            self.notes = ""


@dataclass
class TemplateSection:
    id: str
    name: str
    items: List[TemplateItem] = field(default_factory=list)
    subtotal: Decimal = ZERO          # project cost only, cached
    damage_subtotal: Decimal = ZERO   # damages only, cached


@dataclass
class UnitTurnTemplate:
    id: str
    name: str
    sections: List[TemplateSection] = field(default_factory=list)
    grand_total_project_cost: Decimal = ZERO
    grand_total_damage_charges: Decimal = ZERO

    def iter_items(self) -> Iterator[TemplateItem]:
        for section in self.sections:
            yield from section.items

    def all_items(self) -> List[TemplateItem]:
        return list(self.iter_items())


@dataclass(frozen=True)
class SectionSummary:
    section_name: str
    item_count: int          # active items only
    project_total: Decimal
    damage_total: Decimal


@dataclass(frozen=True)
class GrandTotals:
    grand_total_project_cost: Decimal
    grand_total_damage_charges: Decimal


@dataclass(frozen=True)
class UnitTurnTotals:
    total_project_cost: Decimal
    total_damage_charges: Decimal
    section_summaries: List[SectionSummary]
    total_line_items: int

    @property
    def grand_total(self) -> Decimal:
        # damage charges are billed separately and never part of the grand total
        return self.total_project_cost
