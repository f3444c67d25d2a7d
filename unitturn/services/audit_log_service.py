from typing import Any, Optional, Union
from uuid import uuid4
from decimal import Decimal
from datetime import datetime, date
import enum

from sqlalchemy.orm import Session

from unitturn.models.audit_log import AuditLog
from unitturn.db.enums import AuditEntityType, AuditAction

SYSTEM_OPERATOR = "SYSTEM"

class AuditLogService:
    """
    Centralized service for recording all auditable actions.
    This service is the ONLY place where AuditLog records can be created.
    """

    def __init__(self, db: Session):
        self.db = db

    def serialize_audit_value(self, value) -> Any:
        if value is None:
            return None
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, enum.Enum):
            return value.value
        if isinstance(value, (int, float, str, bool)):
            return value
        return str(value)

    def _normalize_entity_type(self, entity_type: Union[str, AuditEntityType]) -> AuditEntityType:
        """
        Accepts the enum itself, its value ("unit_turn_line_item") or its
        name / model class name ("UnitTurnLineItem").
        """
        if isinstance(entity_type, AuditEntityType):
            return entity_type

        entity_type_str = str(entity_type).strip()
        for enum_member in AuditEntityType:
            if entity_type_str.lower() in (enum_member.value, enum_member.name.lower()):
                return enum_member

        raise ValueError(f"Unknown entity_type: {entity_type_str}. Valid values: {[e.value for e in AuditEntityType]}")

    def _add(
        self,
        *,
        unit_turn_instance_id: Optional[str],
        entity_type: Union[str, AuditEntityType],
        entity_id: str,
        action: AuditAction,
        changed_attribute: str,
        before_value: Any,
        after_value: Any,
        operator_id: str,
    ) -> None:
        log = AuditLog(
            id=str(uuid4()),
            unit_turn_instance_id=unit_turn_instance_id,
            entity_type=self._normalize_entity_type(entity_type),
            entity_id=entity_id,
            action=action,
            changed_attribute=changed_attribute,
            before_value=self.serialize_audit_value(before_value),
            after_value=self.serialize_audit_value(after_value),
            operator_id=operator_id,
            timestamp=datetime.now(),
        )
        self.db.add(log)

    def record_create(
        self,
        *,
        unit_turn_instance_id: Optional[str],
        entity_type: Union[str, AuditEntityType],
        entity_id: str,
        operator_id: str,
    ) -> None:
        '''
        Record the creation of an instance, line item or photo reference.

        :param unit_turn_instance_id: Owning instance ID, optional
        :type unit_turn_instance_id: Optional[str]
        :param entity_type: String or AuditEntityType
        :param entity_id: ID of the created entity
        :param operator_id: Operator performing the action
        '''
        self._add(
            unit_turn_instance_id=unit_turn_instance_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.create,
            changed_attribute="__all__",
            before_value=None,
            after_value=None,
            operator_id=operator_id,
        )

    def record_update(
        self,
        *,
        unit_turn_instance_id: Optional[str],
        entity_type: Union[str, AuditEntityType],
        entity_id: str,
        changed_attribute: str,
        before_value: Any,
        after_value: Any,
        operator_id: str,
    ) -> None:
        '''
        Record a single attribute change made by an operator.

        :param changed_attribute: Name of the changed attribute
        :param before_value: Value before the change
        :param after_value: Value after the change
        '''
        self._add(
            unit_turn_instance_id=unit_turn_instance_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.update,
            changed_attribute=changed_attribute,
            before_value=before_value,
            after_value=after_value,
            operator_id=operator_id,
        )

    def record_delete(
        self,
        *,
        unit_turn_instance_id: Optional[str],
        entity_type: Union[str, AuditEntityType],
        entity_id: str,
        operator_id: str,
    ) -> None:
        self._add(
            unit_turn_instance_id=unit_turn_instance_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.delete,
            changed_attribute="__all__",
            before_value=None,
            after_value=None,
            operator_id=operator_id,
        )

    def record_system_update(
        self,
        *,
        unit_turn_instance_id: Optional[str],
        entity_type: Union[str, AuditEntityType],
        entity_id: str,
        changed_attribute: str,
        before_value: Any,
        after_value: Any,
    ) -> None:
        '''
        Record a change made by the system rather than an operator, e.g.
        totals pushed on save or the cost code seed.
        '''
        self._add(
            unit_turn_instance_id=unit_turn_instance_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.system,
            changed_attribute=changed_attribute,
            before_value=before_value,
            after_value=after_value,
            operator_id=SYSTEM_OPERATOR,
        )
