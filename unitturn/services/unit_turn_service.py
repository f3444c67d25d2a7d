from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from sqlalchemy.orm import Session

from unitturn.constants.cost_codes import is_known_cost_code
from unitturn.constants.templates import DEFAULT_SECTION_NAMES
from unitturn.db.enums import PhotoEntityType, UnitTurnStatus
from unitturn.domain.unit_turn_template import (
    TemplateItem,
    TemplateSection,
    UnitTurnTemplate,
    UnitTurnTotals,
)
from unitturn.logger import get_logger
from unitturn.models.line_item_photo import LineItemPhoto
from unitturn.models.unit_turn_instance import DEFAULT_TEMPLATE_NAME, UnitTurnInstance
from unitturn.models.unit_turn_line_item import UnitTurnLineItem
from unitturn.services.audit_log_service import AuditLogService
from unitturn.services.calculation_service import (
    build_instance_payload,
    build_line_item_payloads,
    calculate_unit_turn_totals,
)
from unitturn.services.validation_service import (
    validate_create_instance_request,
    validate_create_line_item_request,
    validate_unit_turn_status,
)

logger = get_logger(__name__)

INSTANCE_SORT_COLUMNS = {
    "saved_at": UnitTurnInstance.saved_at,
    "last_modified_at": UnitTurnInstance.updated_at,
    "total_project_cost": UnitTurnInstance.total_project_cost,
    "status": UnitTurnInstance.status,
}
LINE_ITEM_SORT_COLUMNS = {
    "order_index": UnitTurnLineItem.order_index,
    "cost_code": UnitTurnLineItem.cost_code,
    "line_total": UnitTurnLineItem.line_total,
}


@dataclass
class SaveResult:
    instance: UnitTurnInstance
    totals: UnitTurnTotals
    line_items: List[UnitTurnLineItem] = field(default_factory=list)
    photos_saved: int = 0


class UnitTurnService:
    """
    Persistence side of a unit turn: instances, line items and photo refs.

    Totals are never accepted from callers; they are always recomputed by
    the calculation core from the items being saved.
    Transactions are owned by the caller (routes commit / rollback).
    """

    # fields an operator may edit directly on an instance
    EDITABLE_INSTANCE_FIELDS = {"template_name", "status", "notes"}

    def __init__(self, db: Session, audit_log_service: AuditLogService):
        self.db = db
        self.audit_log_service = audit_log_service

    # =========
    # Instances
    # =========
    def create_instance(
        self,
        *,
        property_id: str,
        community_id: str,
        operator_id: str,
        template_name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> UnitTurnInstance:
        '''
        Create a draft instance with zero totals.

        :param property_id: Property UUID
        :param community_id: Community UUID
        :param operator_id: Operator creating the instance
        :param template_name: Template the instance starts from, defaults to the standard template
        :param notes: Free-text notes
        :rtype: UnitTurnInstance
        '''
        check = validate_create_instance_request({
            "property_id": property_id,
            "community_id": community_id,
            "template_name": template_name,
        })
        if not check.is_valid:
            raise ValueError("; ".join(check.errors))

        instance = UnitTurnInstance(
            id=str(uuid4()),
            property_id=property_id,
            community_id=community_id,
            template_name=template_name or DEFAULT_TEMPLATE_NAME,
            total_project_cost=Decimal("0"),
            total_damage_charges=Decimal("0"),
            status=UnitTurnStatus.draft,
            created_by=operator_id,
            notes=notes,
            version=1,
        )
        self.db.add(instance)
        self.db.flush()

        self.audit_log_service.record_create(
            unit_turn_instance_id=instance.id,
            entity_type="UnitTurnInstance",
            entity_id=instance.id,
            operator_id=operator_id,
        )
        logger.info("Created unit turn instance %s for property %s", instance.id, property_id)
        return instance

    def get_instance(self, instance_id: str) -> UnitTurnInstance:
        if not instance_id:
            raise ValueError("instance_id is required")
        instance = self.db.get(UnitTurnInstance, instance_id)
        if not instance:
            raise ValueError(f"UnitTurnInstance not found: {instance_id}")
        return instance

    def list_instances(
        self,
        *,
        property_id: Optional[str] = None,
        community_id: Optional[str] = None,
        statuses: Optional[Sequence[str]] = None,
        sort_by: str = "saved_at",
        sort_order: str = "desc",
    ) -> List[UnitTurnInstance]:
        query = self.db.query(UnitTurnInstance)
        if property_id:
            query = query.filter(UnitTurnInstance.property_id == property_id)
        if community_id:
            query = query.filter(UnitTurnInstance.community_id == community_id)
        if statuses:
            query = query.filter(UnitTurnInstance.status.in_([self._parse_status(s) for s in statuses]))

        column = INSTANCE_SORT_COLUMNS.get(sort_by)
        if column is None:
            raise ValueError(f"Unsupported sort_by: {sort_by}")
        query = query.order_by(column.asc() if sort_order == "asc" else column.desc())
        return query.all()

    def update_instance(
        self,
        *,
        instance_id: str,
        updates: Dict[str, Any],
        operator_id: str,
    ) -> UnitTurnInstance:
        '''
        Edit template_name / status / notes. Totals are not editable here;
        they only change through save_unit_turn.
        '''
        instance = self.get_instance(instance_id)

        changed = False
        for field_name, new_value in updates.items():
            if field_name not in self.EDITABLE_INSTANCE_FIELDS:
                raise ValueError(f"Field '{field_name}' is not editable")

            if field_name == "status":
                new_value = self._parse_status(new_value)
            if field_name == "template_name" and not str(new_value or "").strip():
                raise ValueError("template_name cannot be empty string")

            old_value = getattr(instance, field_name)
            if old_value == new_value:
                continue

            setattr(instance, field_name, new_value)
            if field_name == "status" and new_value == UnitTurnStatus.exported:
                instance.exported_at = datetime.now()
            changed = True

            self.audit_log_service.record_update(
                unit_turn_instance_id=instance.id,
                entity_type="UnitTurnInstance",
                entity_id=instance.id,
                changed_attribute=field_name,
                before_value=old_value,
                after_value=new_value,
                operator_id=operator_id,
            )

        if changed:
            instance.version += 1
        self.db.flush()
        return instance

    def delete_instance(self, *, instance_id: str, operator_id: str) -> None:
        instance = self.get_instance(instance_id)
        self._delete_children(instance.id)
        self.db.delete(instance)
        self.audit_log_service.record_delete(
            unit_turn_instance_id=instance.id,
            entity_type="UnitTurnInstance",
            entity_id=instance.id,
            operator_id=operator_id,
        )
        self.db.flush()
        logger.info("Deleted unit turn instance %s", instance_id)

    # =========
    # Save
    # =========
    def save_unit_turn(
        self,
        *,
        instance_id: str,
        template: UnitTurnTemplate,
        operator_id: str,
        photos: Optional[Dict[str, List[Any]]] = None,
    ) -> SaveResult:
        '''
        Persist an edited template against an instance.

        1. recompute totals from the template items
        2. push project cost / damage charges to the instance, status -> completed
        3. replace the instance's line items with one row per active item
        4. attach photo references of items that became line items

        :param instance_id: Target UnitTurnInstance ID
        :param template: Edited template
        :param operator_id: Operator performing the save
        :param photos: Extra photo refs keyed by template item id, merged with item.photos
        :rtype: SaveResult
        '''
        instance = self.get_instance(instance_id)
        if instance.status == UnitTurnStatus.exported:
            raise RuntimeError("UnitTurnInstance already exported; cannot be saved")

        # 1
        totals = calculate_unit_turn_totals(template.all_items(), template)
        instance_payload = build_instance_payload(totals, UnitTurnStatus.completed)

        # 2
        for attr in ("total_project_cost", "total_damage_charges"):
            old_value = getattr(instance, attr)
            new_value = instance_payload[attr]
            if old_value != new_value:
                setattr(instance, attr, new_value)
                self.audit_log_service.record_system_update(
                    unit_turn_instance_id=instance.id,
                    entity_type="UnitTurnInstance",
                    entity_id=instance.id,
                    changed_attribute=attr,
                    before_value=old_value,
                    after_value=new_value,
                )
        old_status = instance.status
        instance.status = UnitTurnStatus(instance_payload["status"])
        if old_status != instance.status:
            self.audit_log_service.record_update(
                unit_turn_instance_id=instance.id,
                entity_type="UnitTurnInstance",
                entity_id=instance.id,
                changed_attribute="status",
                before_value=old_status,
                after_value=instance.status,
                operator_id=operator_id,
            )
        instance.saved_at = datetime.now()
        instance.version += 1

        # 3
        self._delete_children(instance.id)
        line_items = []
        item_to_line: Dict[str, str] = {}
        for payload in build_line_item_payloads(template):
            record = dict(payload, unit_turn_instance_id=instance.id)
            check = validate_create_line_item_request(record)
            if not check.is_valid:
                raise ValueError(f"Invalid line item {payload['template_item_id']}: " + "; ".join(check.errors))
            if not is_known_cost_code(record["cost_code"]):
                logger.warning("Line item %s uses unregistered cost code %s", payload["template_item_id"], record["cost_code"])

            line_item = UnitTurnLineItem(
                id=str(uuid4()),
                unit_turn_instance_id=instance.id,
                template_item_id=record["template_item_id"],
                cost_code=record["cost_code"],
                section_name=record["section_name"],
                description=record["description"],
                area_context=record.get("area_context"),
                quantity=record["quantity"],
                units=record["units"],
                cost_per_unit=record["cost_per_unit"],
                line_total=record["quantity"] * record["cost_per_unit"],
                damage_amount=record["damage_amount"],
                item_notes=record.get("item_notes"),
                order_index=record["order_index"],
                version=1,
            )
            self.db.add(line_item)
            self.audit_log_service.record_create(
                unit_turn_instance_id=instance.id,
                entity_type="UnitTurnLineItem",
                entity_id=line_item.id,
                operator_id=operator_id,
            )
            line_items.append(line_item)
            item_to_line[record["template_item_id"]] = line_item.id

        # 4
        photos_saved = 0
        for item_id, refs in self._collect_photos(template, photos).items():
            line_item_id = item_to_line.get(item_id)
            if line_item_id is None:
                logger.info("Skipping %d photo(s) of inactive item %s", len(refs), item_id)
                continue
            for ref in refs:
                self.db.add(self._photo_from_ref(ref, instance.id, line_item_id))
                photos_saved += 1

        self.db.flush()
        logger.info(
            "Saved unit turn %s: %d line items, %d photos, project_cost=%s, damages=%s",
            instance.id, len(line_items), photos_saved,
            totals.total_project_cost, totals.total_damage_charges,
        )
        return SaveResult(instance=instance, totals=totals, line_items=line_items, photos_saved=photos_saved)

    # =========
    # Line items & summary
    # =========
    def list_line_items(
        self,
        instance_id: str,
        *,
        section_name: Optional[str] = None,
        cost_code: Optional[int] = None,
        sort_by: str = "order_index",
        sort_order: str = "asc",
    ) -> List[UnitTurnLineItem]:
        query = self.db.query(UnitTurnLineItem).filter(
            UnitTurnLineItem.unit_turn_instance_id == instance_id
        )
        if section_name:
            query = query.filter(UnitTurnLineItem.section_name == section_name)
        if cost_code is not None:
            query = query.filter(UnitTurnLineItem.cost_code == cost_code)

        column = LINE_ITEM_SORT_COLUMNS.get(sort_by)
        if column is None:
            raise ValueError(f"Unsupported sort_by: {sort_by}")
        return query.order_by(column.desc() if sort_order == "desc" else column.asc()).all()

    def list_photos(self, instance_id: str) -> List[LineItemPhoto]:
        return (
            self.db.query(LineItemPhoto)
            .filter(LineItemPhoto.unit_turn_instance_id == instance_id)
            .all()
        )

    def get_summary(self, instance_id: str) -> UnitTurnTotals:
        '''
        Re-derive the totals view from the persisted line items.
        Every catalog section is reported, followed by any other section
        names found on the line items.
        '''
        self.get_instance(instance_id)
        rows = self.list_line_items(instance_id)
        template = self.template_from_line_items(rows)
        return calculate_unit_turn_totals(template.all_items(), template)

    def template_from_line_items(self, rows: Sequence[UnitTurnLineItem]) -> UnitTurnTemplate:
        sections: Dict[str, TemplateSection] = {
            name: TemplateSection(id=name, name=name) for name in DEFAULT_SECTION_NAMES
        }
        for row in rows:
            section = sections.setdefault(
                row.section_name, TemplateSection(id=row.section_name, name=row.section_name)
            )
            section.items.append(
                TemplateItem(
                    id=row.id,
                    cost_code=row.cost_code,
                    area=row.area_context or row.description,
                    description=row.description,
                    quantity=row.quantity,
                    units=row.units,
                    cost_per_unit=row.cost_per_unit,
                    total=row.line_total,
                    damages=row.damage_amount,
                    notes=row.item_notes or "",
                )
            )
        return UnitTurnTemplate(id="persisted", name="persisted", sections=list(sections.values()))

    # =========
    # helpers
    # =========
    def _parse_status(self, value) -> UnitTurnStatus:
        if isinstance(value, UnitTurnStatus):
            return value
        check = validate_unit_turn_status(value)
        if not check.is_valid:
            raise ValueError(check.errors[0])
        return UnitTurnStatus(value)

    def _delete_children(self, instance_id: str) -> None:
        self.db.query(LineItemPhoto).filter(
            LineItemPhoto.unit_turn_instance_id == instance_id
        ).delete(synchronize_session=False)
        self.db.query(UnitTurnLineItem).filter(
            UnitTurnLineItem.unit_turn_instance_id == instance_id
        ).delete(synchronize_session=False)

    def _collect_photos(
        self,
        template: UnitTurnTemplate,
        extra: Optional[Dict[str, List[Any]]],
    ) -> Dict[str, List[Any]]:
        collected: Dict[str, List[Any]] = {}
        for item in template.iter_items():
            if item.photos:
                collected.setdefault(item.id, []).extend(item.photos)
        for item_id, refs in (extra or {}).items():
            collected.setdefault(item_id, []).extend(refs or [])
        return collected

    def _photo_from_ref(self, ref: Any, instance_id: str, line_item_id: str) -> LineItemPhoto:
        '''Photo refs are opaque: a dict from the upload pipeline or a bare URI string.'''
        if isinstance(ref, dict):
            return LineItemPhoto(
                id=str(uuid4()),
                unit_turn_instance_id=instance_id,
                line_item_id=line_item_id,
                entity_type=PhotoEntityType.unit_turn_line_item,
                file_id=ref.get("file_id"),
                file_path=ref.get("file_path"),
                url=ref.get("url") or ref.get("uri"),
                caption=ref.get("caption"),
            )
        return LineItemPhoto(
            id=str(uuid4()),
            unit_turn_instance_id=instance_id,
            line_item_id=line_item_id,
            entity_type=PhotoEntityType.unit_turn_line_item,
            url=str(ref),
        )
