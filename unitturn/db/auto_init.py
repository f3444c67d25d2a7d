"""
Start-up database check: create missing tables and seed the cost code registry.
"""
from sqlalchemy import inspect

from unitturn.db.session import get_engine, get_session
from unitturn.db.init_db import init_db
from unitturn.logger import get_logger
from unitturn.services.audit_log_service import AuditLogService
from unitturn.services.cost_code_service import CostCodeService

logger = get_logger(__name__)

REQUIRED_TABLES = (
    "unit_turn_instances",
    "unit_turn_line_items",
    "line_item_photos",
    "accounting_cost_codes",
    "audit_logs",
)


def check_tables_exist() -> bool:
    try:
        tables = set(inspect(get_engine()).get_table_names())
    except Exception as e:
        logger.warning("Could not inspect database tables: %s", e)
        return False
    return all(name in tables for name in REQUIRED_TABLES)


def seed_cost_codes() -> int:
    db = get_session()
    try:
        inserted = CostCodeService(db, AuditLogService(db)).seed_cost_codes()
        db.commit()
        return inserted
    except Exception:
        db.rollback()
        logger.exception("Seeding cost codes failed")
        raise
    finally:
        db.close()


def auto_init():
    """
    Create tables if any is missing, then make sure every registry cost code has a row.
    """
    logger.info("Checking database initialisation")

    if not check_tables_exist():
        logger.info("Tables missing, creating")
        init_db()
    else:
        logger.info("Tables present")

    inserted = seed_cost_codes()
    logger.info("Database initialisation complete, %d cost codes seeded", inserted)


if __name__ == "__main__":
    auto_init()
