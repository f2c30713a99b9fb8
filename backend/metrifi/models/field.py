from metrifi.extensions import db
from .base import BaseModel


class FieldDefinition(BaseModel):
    __tablename__ = "field_definitions"

    key = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    label = db.Column(db.String(200), nullable=False, default="")
    type = db.Column(db.String(50), nullable=False, default="flexible_content")


class FieldValue(BaseModel):
    __tablename__ = "field_values"

    record_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    field_key = db.Column(db.String(64), nullable=False, index=True)
    # Name of the definition the key belonged to at write time, or the key itself
    field_name = db.Column(db.String(100), nullable=False, index=True)
    value = db.Column(db.JSON, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("record_id", "field_key", name="uq_field_value_per_record"),
    )
