import io
from datetime import datetime
from typing import Dict, List, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from unitturn.constants.cost_codes import get_cost_code
from unitturn.db.enums import UnitTurnStatus
from unitturn.logger import get_logger
from unitturn.models.unit_turn_instance import UnitTurnInstance
from unitturn.models.unit_turn_line_item import UnitTurnLineItem
from unitturn.services.audit_log_service import AuditLogService
from unitturn.services.unit_turn_service import UnitTurnService
from unitturn.services.validation_service import (
    combine_validation_results,
    validate_instance,
    validate_line_item,
)

logger = get_logger(__name__)

EXPORT_FORMATS = {
    "csv": ("text/csv", "csv"),
    "excel": ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", "xlsx"),
}
EXPORTABLE_STATUSES = (UnitTurnStatus.completed, UnitTurnStatus.exported)

LINE_HEADER = [
    "Cost Code", "GL Account", "Classification", "Description",
    "Quantity", "Units", "Cost / Unit", "Line Total", "Damages", "Notes",
]


class ExportService:
    """
    Turns a saved unit turn into a flat, human-readable report.
    """

    def __init__(self, db: Session, audit_log_service: AuditLogService):
        self.db = db
        self.audit_log_service = audit_log_service
        self.unit_turn_service = UnitTurnService(db, audit_log_service)

    def generate_df_report(self, instance: UnitTurnInstance) -> pd.DataFrame:
        """
        Build the report DataFrame of a saved instance.

        Layout: instance header, then per section a title row, a column
        header, one row per line item and a subtotal row; project cost and
        damage charges are reported on separate final rows.

        This function does NOT persist data.
        """
        if instance.status not in EXPORTABLE_STATUSES:
            raise RuntimeError(
                f"UnitTurnInstance must be saved before export, status is {instance.status.value}"
            )

        line_items = self.unit_turn_service.list_line_items(instance.id)
        check = combine_validation_results(
            [validate_instance(instance)] + [validate_line_item(li) for li in line_items]
        )
        if not check.is_valid:
            raise RuntimeError("Stored unit turn is inconsistent: " + "; ".join(check.errors))

        totals = self.unit_turn_service.get_summary(instance.id)

        by_section: Dict[str, List[UnitTurnLineItem]] = {}
        for line_item in line_items:
            by_section.setdefault(line_item.section_name, []).append(line_item)

        rows = []

        # header
        rows.append(["Unit Turn Cost Report"])
        rows.append(["Template", instance.template_name])
        rows.append(["Property", instance.property_id])
        rows.append(["Community", instance.community_id])
        rows.append(["Status", instance.status.value])
        rows.append(["Saved At", instance.saved_at.strftime("%Y-%m-%d %H:%M") if instance.saved_at else ""])
        rows.append(["", ""])

        # sections, only those with line items
        for summary in totals.section_summaries:
            section_rows = by_section.get(summary.section_name)
            if not section_rows:
                continue
            rows.append([summary.section_name])
            rows.append(LINE_HEADER)
            for line_item in section_rows:
                entry = get_cost_code(line_item.cost_code)
                rows.append([
                    line_item.cost_code,
                    entry.gl_account if entry else "",
                    entry.classification.value if entry else "",
                    line_item.description,
                    float(line_item.quantity),
                    line_item.units,
                    float(line_item.cost_per_unit),
                    float(line_item.line_total or 0),
                    float(line_item.damage_amount),
                    line_item.item_notes or "",
                ])
            rows.append([
                "Subtotal", "", "", "", "", "", "",
                float(summary.project_total), float(summary.damage_total), "",
            ])
            rows.append(["", ""])

        rows.append(["Total Line Items", totals.total_line_items])
        rows.append(["Total Project Cost", float(totals.total_project_cost)])
        rows.append(["Total Damage Charges", float(totals.total_damage_charges)])
        rows.append(["Report Date", datetime.now().strftime("%Y-%m-%d")])

        logger.info("Built report for unit turn %s: %d line items", instance.id, len(line_items))
        return pd.DataFrame(rows)

    def export(self, *, instance_id: str, fmt: str, operator_id: str) -> Tuple[io.BytesIO, str, str]:
        '''
        Render the report and mark the instance exported.

        :param fmt: "csv" or "excel"
        :return: (buffer, mimetype, download filename)
        '''
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt}")

        instance = self.unit_turn_service.get_instance(instance_id)
        df = self.generate_df_report(instance)

        output = io.BytesIO()
        if fmt == "excel":
            with pd.ExcelWriter(output, engine="openpyxl") as writer:
                df.to_excel(writer, index=False, header=False, sheet_name="Unit Turn")
        else:
            output.write(df.to_csv(index=False, header=False).encode("utf-8"))
        output.seek(0)

        if instance.status != UnitTurnStatus.exported:
            self.unit_turn_service.update_instance(
                instance_id=instance.id,
                updates={"status": UnitTurnStatus.exported},
                operator_id=operator_id,
            )

        mimetype, extension = EXPORT_FORMATS[fmt]
        filename = f"unit_turn_{instance.property_id}_v{instance.version}.{extension}"
        return output, mimetype, filename
