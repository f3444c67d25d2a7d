# unitturn/routes/cost_code.py
from flask import Blueprint, request

from unitturn.db.session import get_session
from unitturn.routes.common import fail, ok
from unitturn.schemas.dto.cost_code_dto import CostCodeDTO
from unitturn.services.audit_log_service import AuditLogService
from unitturn.services.cost_code_service import CostCodeService

cost_code_bp = Blueprint('cost_code', __name__, url_prefix='/api/cost-codes')


@cost_code_bp.route('', methods=['GET'])
def list_cost_codes():
    """Accounting cost code registry, active codes unless ?include_inactive=1, optionally filtered by ?classification="""
    include_inactive = request.args.get('include_inactive', '').lower() in ('1', 'true', 'yes')
    db = get_session()
    try:
        service = CostCodeService(db, AuditLogService(db))
        rows = service.list_cost_codes(
            include_inactive=include_inactive,
            classification=request.args.get('classification'),
        )
        return ok([CostCodeDTO.from_domain_model(r).model_dump() for r in rows])
    except Exception as e:
        db.rollback()
        return fail(e)
    finally:
        db.close()
