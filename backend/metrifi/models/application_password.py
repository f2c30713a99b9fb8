# metrifi/models/application_password.py
import re
import secrets

from werkzeug.security import generate_password_hash, check_password_hash
from metrifi.extensions import db
from .base import BaseModel

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def normalize_app_password(password):
    """Application passwords are often shown grouped with spaces; compare without them."""
    return _NON_ALNUM_RE.sub("", password or "")


def generate_app_password(length=24):
    raw = secrets.token_urlsafe(length * 2)
    raw = normalize_app_password(raw)[:length]
    return " ".join(raw[i:i + 4] for i in range(0, len(raw), 4))


class ApplicationPassword(BaseModel):
    __tablename__ = "application_passwords"

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    user = db.relationship("User", back_populates="application_passwords")

    def set_password(self, password):
        self.password_hash = generate_password_hash(normalize_app_password(password))

    def check_password(self, password):
        return check_password_hash(self.password_hash, normalize_app_password(password))
