from typing import List
from pydantic import BaseModel

from unitturn.domain.unit_turn_template import SectionSummary, UnitTurnTotals


class SectionSummaryDTO(BaseModel):
    section_name: str
    item_count: int
    project_total: float
    damage_total: float

    @classmethod
    def from_domain_model(cls, summary: SectionSummary) -> "SectionSummaryDTO":
        return cls(
            section_name=summary.section_name,
            item_count=summary.item_count,
            project_total=float(summary.project_total),
            damage_total=float(summary.damage_total),
        )


class UnitTurnTotalsDTO(BaseModel):
    total_project_cost: float
    total_damage_charges: float
    grand_total: float
    total_line_items: int
    section_summaries: List[SectionSummaryDTO]

    @classmethod
    def from_domain_model(cls, totals: UnitTurnTotals) -> "UnitTurnTotalsDTO":
        return cls(
            total_project_cost=float(totals.total_project_cost),
            total_damage_charges=float(totals.total_damage_charges),
            grand_total=float(totals.grand_total),
            total_line_items=totals.total_line_items,
            section_summaries=[SectionSummaryDTO.from_domain_model(s) for s in totals.section_summaries],
        )
