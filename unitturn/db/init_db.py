from unitturn.db.session import get_engine
from unitturn.db.base import Base

def init_db():
    # models must be imported so their tables are registered on Base.metadata
    from unitturn.models import accounting_cost_code, audit_log, line_item_photo, unit_turn_instance, unit_turn_line_item  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
