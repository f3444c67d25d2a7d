# unitturn/routes/unit_turn.py
from flask import Blueprint, request, send_file

from unitturn.constants.templates import create_default_template
from unitturn.db.session import get_session
from unitturn.routes.common import fail, get_json_body, get_operator_id, ok
from unitturn.schemas.dto.totals_dto import UnitTurnTotalsDTO
from unitturn.schemas.dto.unit_turn_dto import LineItemDTO, UnitTurnInstanceDTO
from unitturn.schemas.requests import CreateInstanceRequest, SaveUnitTurnRequest, UpdateInstanceRequest
from unitturn.services.audit_log_service import AuditLogService
from unitturn.services.calculation_service import merge_items_into_template
from unitturn.services.export_service import ExportService
from unitturn.services.unit_turn_service import UnitTurnService

unit_turn_bp = Blueprint('unit_turn', __name__, url_prefix='/api/unit-turns')


def _service(db) -> UnitTurnService:
    return UnitTurnService(db, AuditLogService(db))


@unit_turn_bp.route('', methods=['POST'])
def create_instance():
    """Create a draft unit turn"""
    db = get_session()
    try:
        req = CreateInstanceRequest.model_validate(get_json_body())
        instance = _service(db).create_instance(
            property_id=req.property_id,
            community_id=req.community_id,
            template_name=req.template_name,
            notes=req.notes,
            operator_id=get_operator_id(),
        )
        db.commit()
        return ok(UnitTurnInstanceDTO.from_domain_model(instance).model_dump(mode="json"), 201)
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('', methods=['GET'])
def list_instances():
    """List unit turns, filtered by property / community / status"""
    db = get_session()
    try:
        statuses = [s for s in request.args.get('status', '').split(',') if s]
        instances = _service(db).list_instances(
            property_id=request.args.get('property_id'),
            community_id=request.args.get('community_id'),
            statuses=statuses or None,
            sort_by=request.args.get('sort_by', 'saved_at'),
            sort_order=request.args.get('sort_order', 'desc'),
        )
        return ok([UnitTurnInstanceDTO.from_domain_model(i).model_dump(mode="json") for i in instances])
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('/<instance_id>', methods=['GET'])
def get_instance(instance_id):
    db = get_session()
    try:
        instance = _service(db).get_instance(instance_id)
        return ok(UnitTurnInstanceDTO.from_domain_model(instance).model_dump(mode="json"))
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('/<instance_id>', methods=['PUT'])
def update_instance(instance_id):
    """Edit template name / status / notes"""
    db = get_session()
    try:
        req = UpdateInstanceRequest.model_validate(get_json_body())
        instance = _service(db).update_instance(
            instance_id=instance_id,
            updates=req.model_dump(exclude_unset=True),
            operator_id=get_operator_id(),
        )
        db.commit()
        return ok(UnitTurnInstanceDTO.from_domain_model(instance).model_dump(mode="json"))
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('/<instance_id>', methods=['DELETE'])
def delete_instance(instance_id):
    db = get_session()
    try:
        _service(db).delete_instance(instance_id=instance_id, operator_id=get_operator_id())
        db.commit()
        return ok({"id": instance_id})
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('/<instance_id>/save', methods=['POST'])
def save_unit_turn(instance_id):
    """Persist the edited items: totals, line items and photos in one transaction"""
    db = get_session()
    try:
        req = SaveUnitTurnRequest.model_validate(get_json_body())
        template = merge_items_into_template(
            create_default_template(),
            [dto.to_domain_model() for dto in req.items],
        )
        result = _service(db).save_unit_turn(
            instance_id=instance_id,
            template=template,
            photos=req.photos,
            operator_id=get_operator_id(),
        )
        db.commit()
        return ok({
            "instance": UnitTurnInstanceDTO.from_domain_model(result.instance).model_dump(mode="json"),
            "totals": UnitTurnTotalsDTO.from_domain_model(result.totals).model_dump(),
            "line_items": [LineItemDTO.from_domain_model(li).model_dump() for li in result.line_items],
            "photos_saved": result.photos_saved,
        })
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('/<instance_id>/line-items', methods=['GET'])
def list_line_items(instance_id):
    db = get_session()
    try:
        service = _service(db)
        service.get_instance(instance_id)
        cost_code = request.args.get('cost_code')
        if cost_code is not None and not cost_code.isdigit():
            raise ValueError(f"cost_code must be an integer, got: {cost_code}")
        line_items = service.list_line_items(
            instance_id,
            section_name=request.args.get('section_name'),
            cost_code=int(cost_code) if cost_code is not None else None,
            sort_by=request.args.get('sort_by', 'order_index'),
            sort_order=request.args.get('sort_order', 'asc'),
        )
        return ok([LineItemDTO.from_domain_model(li).model_dump() for li in line_items])
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('/<instance_id>/summary', methods=['GET'])
def get_summary(instance_id):
    """Totals re-derived from the persisted line items"""
    db = get_session()
    try:
        totals = _service(db).get_summary(instance_id)
        return ok(UnitTurnTotalsDTO.from_domain_model(totals).model_dump())
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()


@unit_turn_bp.route('/<instance_id>/export/<fmt>', methods=['GET'])
def export(instance_id, fmt):
    """Download the report as CSV or Excel; marks the instance exported"""
    db = get_session()
    try:
        service = ExportService(db, AuditLogService(db))
        output, mimetype, filename = service.export(
            instance_id=instance_id,
            fmt=fmt,
            operator_id=get_operator_id(),
        )
        db.commit()
        return send_file(output, mimetype=mimetype, as_attachment=True, download_name=filename)
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()
