from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from unitturn.models.line_item_photo import LineItemPhoto
from unitturn.models.unit_turn_instance import UnitTurnInstance
from unitturn.constants.cost_codes import describe_cost_code
from unitturn.models.unit_turn_line_item import UnitTurnLineItem


class UnitTurnInstanceDTO(BaseModel):
    id: str
    property_id: str
    community_id: str
    template_name: str
    total_project_cost: float
    total_damage_charges: float
    status: str
    created_by: Optional[str] = None
    notes: Optional[str] = None
    version: int

    created_at: Optional[datetime] = None
    last_modified_at: Optional[datetime] = None
    saved_at: Optional[datetime] = None
    exported_at: Optional[datetime] = None

    @classmethod
    def from_domain_model(cls, instance: UnitTurnInstance) -> "UnitTurnInstanceDTO":
        return cls(
            id=instance.id,
            property_id=instance.property_id,
            community_id=instance.community_id,
            template_name=instance.template_name,
            total_project_cost=float(instance.total_project_cost or 0),
            total_damage_charges=float(instance.total_damage_charges or 0),
            status=instance.status.value,
            created_by=instance.created_by,
            notes=instance.notes,
            version=instance.version,
            created_at=instance.created_at,
            last_modified_at=instance.updated_at,
            saved_at=instance.saved_at,
            exported_at=instance.exported_at,
        )


class LineItemDTO(BaseModel):
    id: str
    unit_turn_instance_id: str
    template_item_id: Optional[str] = None
    cost_code: int
    cost_code_label: str
    section_name: str
    description: str
    area_context: Optional[str] = None
    quantity: float
    units: str
    cost_per_unit: float
    line_total: float
    damage_amount: float
    item_notes: Optional[str] = None
    order_index: int

    @classmethod
    def from_domain_model(cls, line_item: UnitTurnLineItem) -> "LineItemDTO":
        return cls(
            id=line_item.id,
            unit_turn_instance_id=line_item.unit_turn_instance_id,
            template_item_id=line_item.template_item_id,
            cost_code=line_item.cost_code,
            cost_code_label=describe_cost_code(line_item.cost_code),
            section_name=line_item.section_name,
            description=line_item.description,
            area_context=line_item.area_context,
            quantity=float(line_item.quantity or 0),
            units=line_item.units,
            cost_per_unit=float(line_item.cost_per_unit or 0),
            line_total=float(line_item.line_total or 0),
            damage_amount=float(line_item.damage_amount or 0),
            item_notes=line_item.item_notes,
            order_index=line_item.order_index,
        )


class LineItemPhotoDTO(BaseModel):
    id: str
    line_item_id: Optional[str] = None
    file_id: Optional[str] = None
    file_path: Optional[str] = None
    url: Optional[str] = None
    caption: Optional[str] = None

    @classmethod
    def from_domain_model(cls, photo: LineItemPhoto) -> "LineItemPhotoDTO":
        return cls(
            id=photo.id,
            line_item_id=photo.line_item_id,
            file_id=photo.file_id,
            file_path=photo.file_path,
            url=photo.url,
            caption=photo.caption,
        )
