from metrifi.extensions import db
from .base import BaseModel


class Page(BaseModel):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False, default="")
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    type = db.Column(db.String(20), nullable=False, default="page")
    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
