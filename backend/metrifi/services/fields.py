"""
Custom-field store: named field definitions and per-record JSON values.

Failures never propagate out of this module. Writes report ``False`` and
reads report ``None``, and both are logged.
"""
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from metrifi.extensions import db
from metrifi.models.field import FieldDefinition, FieldValue

logger = logging.getLogger(__name__)


class FieldStore:
    def resolve_key(self, field_name: str) -> str | None:
        try:
            definition = FieldDefinition.query.filter_by(name=field_name).first()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning("Field store unavailable while resolving %r: %s", field_name, exc)
            return None

        if definition is None or not definition.key:
            return None
        return definition.key

    def write_field(self, field_key: str, value: Any, record_id: str) -> bool:
        try:
            definition = FieldDefinition.query.filter_by(key=field_key).first()
            field_name = definition.name if definition else field_key

            stored = FieldValue.query.filter_by(record_id=record_id, field_key=field_key).first()
            if stored is None:
                stored = FieldValue()
                stored.record_id = record_id
                stored.field_key = field_key
                db.session.add(stored)

            stored.field_name = field_name
            stored.value = value
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning("Failed to write field %s on record %s: %s", field_key, record_id, exc)
            return False

        return True

    def read_field(self, field_name: str, record_id: str) -> Any:
        try:
            stored = (
                FieldValue.query
                .filter_by(record_id=record_id, field_name=field_name)
                .order_by(FieldValue.updated_at.desc())
                .first()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning("Failed to read field %r on record %s: %s", field_name, record_id, exc)
            return None

        return stored.value if stored else None

    def read_fields(self, record_id: str) -> dict:
        """All field values of a record keyed by field name."""
        try:
            rows = FieldValue.query.filter_by(record_id=record_id).all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning("Failed to read fields on record %s: %s", record_id, exc)
            return {}

        return {row.field_name: row.value for row in rows}
