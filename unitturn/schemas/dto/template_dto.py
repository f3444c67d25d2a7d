from typing import Any, List, Optional
from pydantic import BaseModel, Field

from unitturn.domain.unit_turn_template import TemplateItem, TemplateSection, UnitTurnTemplate


class TemplateItemDTO(BaseModel):
    '''
    Wire form of a TemplateItem. Used both ways: inbound edits are checked
    for non-negative amounts here, outbound items carry the derived total.
    '''
    id: str
    cost_code: int = Field(gt=0)
    area: str
    description: str
    quantity: float = Field(default=0, ge=0, allow_inf_nan=False)
    units: str = "ls"
    cost_per_unit: float = Field(default=0, ge=0, allow_inf_nan=False)
    total: float = 0
    damages: float = Field(default=0, ge=0, allow_inf_nan=False)
    notes: Optional[str] = ""
    photos: List[Any] = []

    @classmethod
    def from_domain_model(cls, item: TemplateItem) -> "TemplateItemDTO":
        return cls(
            id=item.id,
            cost_code=item.cost_code,
            area=item.area,
            description=item.description,
            quantity=float(item.quantity),
            units=item.units,
            cost_per_unit=float(item.cost_per_unit),
            total=float(item.total),
            damages=float(item.damages),
            notes=item.notes,
            photos=list(item.photos),
        )

    def to_domain_model(self) -> TemplateItem:
        # total is never taken from the wire, the calculators derive it
        return TemplateItem(
            id=self.id,
            cost_code=self.cost_code,
            area=self.area,
            description=self.description,
            quantity=self.quantity,
            units=self.units,
            cost_per_unit=self.cost_per_unit,
            damages=self.damages,
            notes=self.notes or "",
            photos=list(self.photos),
        )


class TemplateSectionDTO(BaseModel):
    id: str
    name: str
    items: List[TemplateItemDTO]
    subtotal: float
    damage_subtotal: float

    @classmethod
    def from_domain_model(cls, section: TemplateSection) -> "TemplateSectionDTO":
        return cls(
            id=section.id,
            name=section.name,
            items=[TemplateItemDTO.from_domain_model(i) for i in section.items],
            subtotal=float(section.subtotal),
            damage_subtotal=float(section.damage_subtotal),
        )


class UnitTurnTemplateDTO(BaseModel):
    id: str
    name: str
    sections: List[TemplateSectionDTO]
    grand_total_project_cost: float
    grand_total_damage_charges: float

    @classmethod
    def from_domain_model(cls, template: UnitTurnTemplate) -> "UnitTurnTemplateDTO":
        return cls(
            id=template.id,
            name=template.name,
            sections=[TemplateSectionDTO.from_domain_model(s) for s in template.sections],
            grand_total_project_cost=float(template.grand_total_project_cost),
            grand_total_damage_charges=float(template.grand_total_damage_charges),
        )
