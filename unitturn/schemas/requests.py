from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from unitturn.schemas.dto.template_dto import TemplateItemDTO


class CalculateRequest(BaseModel):
    items: List[TemplateItemDTO]


class UpdateFieldRequest(BaseModel):
    items: List[TemplateItemDTO]
    item_id: str
    field: str
    value: Any = None


class CreateInstanceRequest(BaseModel):
    property_id: str
    community_id: str
    template_name: Optional[str] = None
    notes: Optional[str] = None


class UpdateInstanceRequest(BaseModel):
    template_name: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class SaveUnitTurnRequest(BaseModel):
    # flat edited items, matched into the default catalog by id
    items: List[TemplateItemDTO] = Field(default_factory=list)
    photos: Dict[str, List[Any]] = Field(default_factory=dict)
