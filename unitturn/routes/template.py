# unitturn/routes/template.py
"""
Stateless calculation endpoints. Nothing here touches the database: the
client holds the live template and sends its items back for each step.
"""
from flask import Blueprint

from unitturn.constants.templates import create_default_template
from unitturn.logger import get_logger
from unitturn.routes.common import fail, get_json_body, ok
from unitturn.schemas.dto.template_dto import TemplateItemDTO, UnitTurnTemplateDTO
from unitturn.schemas.dto.totals_dto import UnitTurnTotalsDTO
from unitturn.schemas.requests import CalculateRequest, UpdateFieldRequest
from unitturn.services.calculation_service import calculate_unit_turn_totals
from unitturn.services.field_update_service import apply_field_update, validate_field

logger = get_logger(__name__)

template_bp = Blueprint('template', __name__, url_prefix='/api/templates')


@template_bp.route('/default', methods=['GET'])
def default_template():
    """Fresh, zeroed default template"""
    try:
        template = create_default_template()
        return ok(UnitTurnTemplateDTO.from_domain_model(template).model_dump())
    except Exception as e:
        return fail(e)


@template_bp.route('/calculate', methods=['POST'])
def calculate():
    """Consolidated totals of a flat item list"""
    try:
        req = CalculateRequest.model_validate(get_json_body())
        items = [dto.to_domain_model() for dto in req.items]
        totals = calculate_unit_turn_totals(items)
        return ok(UnitTurnTotalsDTO.from_domain_model(totals).model_dump())
    except Exception as e:
        return fail(e)


@template_bp.route('/update-field', methods=['POST'])
def update_field():
    """Apply one edit, return the new items and fresh totals"""
    try:
        req = UpdateFieldRequest.model_validate(get_json_body())
        if not validate_field(req.field, req.value):
            raise ValueError(f"Invalid value for field '{req.field}': {req.value!r}")

        items = [dto.to_domain_model() for dto in req.items]
        result = apply_field_update(items, req.item_id, req.field, req.value)
        if not result.matched:
            logger.warning("Field update ignored, item not found: item_id=%s field=%s", req.item_id, req.field)
        totals = calculate_unit_turn_totals(result.items)

        return ok({
            "items": [TemplateItemDTO.from_domain_model(i).model_dump() for i in result.items],
            "matched": result.matched,
            "totals": UnitTurnTotalsDTO.from_domain_model(totals).model_dump(),
        })
    except Exception as e:
        return fail(e)
