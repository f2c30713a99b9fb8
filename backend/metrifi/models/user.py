from metrifi.extensions import db
from .base import BaseModel

# Capabilities granted by each role.
ROLE_CAPABILITIES = {
    "administrator": {"edit_pages", "publish_pages", "edit_posts", "manage_options"},
    "editor": {"edit_pages", "publish_pages", "edit_posts"},
    "author": {"edit_posts"},
    "contributor": {"edit_posts"},
    "subscriber": set(),
}


class User(BaseModel):
    __tablename__ = "users"

    username = db.Column(db.String(60), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False)

    role = db.Column(db.String(50), nullable=False, default="subscriber")
    is_active = db.Column(db.Boolean, default=True)

    application_passwords = db.relationship(
        "ApplicationPassword",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def capabilities(self):
        return frozenset(ROLE_CAPABILITIES.get(self.role, set()))

    def has_cap(self, capability):
        return capability in self.capabilities
