from decimal import Decimal

import pytest

from unitturn.constants.templates import create_default_template
from unitturn.db.enums import UnitTurnStatus
from unitturn.services.audit_log_service import AuditLogService
from unitturn.services.export_service import ExportService
from unitturn.services.unit_turn_service import UnitTurnService


def _saved_instance(db, property_ids):
    service = UnitTurnService(db, AuditLogService(db))
    instance = service.create_instance(operator_id="op-1", **property_ids)
    template = create_default_template()
    items = {item.id: item for item in template.iter_items()}
    items["kitchen-1"].quantity = Decimal("2")
    items["kitchen-1"].cost_per_unit = Decimal("150")
    items["kitchen-1"].damages = Decimal("35")
    items["cap-x-1"].quantity = Decimal("1")
    items["cap-x-1"].cost_per_unit = Decimal("4200")
    service.save_unit_turn(instance_id=instance.id, template=template, operator_id="op-1")
    db.commit()
    return instance


def _rows(df):
    # ragged rows are padded with None / NaN
    return [[v for v in row if v is not None and (isinstance(v, str) or v == v)] for row in df.values.tolist()]


def test_report_layout(db, property_ids):
    instance = _saved_instance(db, property_ids)
    df = ExportService(db, AuditLogService(db)).generate_df_report(instance)
    rows = _rows(df)

    assert rows[0] == ["Unit Turn Cost Report"]
    titles = [row[0] for row in rows if len(row) == 1]
    assert titles[1:] == ["Kitchen & Nook", "CAP-X - Over $1,000"]

    kitchen_line = next(row for row in rows if len(row) > 3 and row[3] == "Cabinets Repairs")
    assert kitchen_line[:3] == [6, "58035", "UT"]
    assert kitchen_line[7] == 300.0
    assert kitchen_line[8] == 35.0

    subtotals = [row for row in rows if row and row[0] == "Subtotal"]
    assert [(r[7], r[8]) for r in subtotals] == [(300.0, 35.0), (4200.0, 0.0)]

    finals = {row[0]: row[1] for row in rows if row and row[0] in ("Total Project Cost", "Total Damage Charges")}
    assert finals == {"Total Project Cost": 4500.0, "Total Damage Charges": 35.0}


def test_export_csv_marks_instance_exported(db, property_ids):
    instance = _saved_instance(db, property_ids)
    output, mimetype, filename = ExportService(db, AuditLogService(db)).export(
        instance_id=instance.id, fmt="csv", operator_id="op-1"
    )
    db.commit()

    text = output.getvalue().decode("utf-8")
    assert mimetype == "text/csv"
    assert filename.endswith(".csv")
    assert "Total Damage Charges" in text
    assert instance.status == UnitTurnStatus.exported
    assert instance.exported_at is not None


def test_export_excel(db, property_ids):
    instance = _saved_instance(db, property_ids)
    output, mimetype, filename = ExportService(db, AuditLogService(db)).export(
        instance_id=instance.id, fmt="excel", operator_id="op-1"
    )
    assert output.getvalue()[:2] == b"PK"
    assert filename.endswith(".xlsx")


def test_unsaved_instance_cannot_be_exported(db, property_ids):
    service = UnitTurnService(db, AuditLogService(db))
    instance = service.create_instance(operator_id="op-1", **property_ids)
    with pytest.raises(RuntimeError, match="must be saved"):
        ExportService(db, AuditLogService(db)).export(instance_id=instance.id, fmt="csv", operator_id="op-1")


def test_unknown_format(db, property_ids):
    instance = _saved_instance(db, property_ids)
    with pytest.raises(ValueError):
        ExportService(db, AuditLogService(db)).export(instance_id=instance.id, fmt="pdf", operator_id="op-1")
