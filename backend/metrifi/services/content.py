import logging
from typing import Any, Dict

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from metrifi.extensions import db
from metrifi.models.page import Page
from metrifi.utils.slug import slugify
from metrifi.utils.transaction import transactional

logger = logging.getLogger(__name__)


class PageCreationError(Exception):
    """The content store rejected a new page."""


class ContentStore:
    def create_page(self, data: Dict[str, Any], *, author_id: str | None = None) -> str:
        """
        Insert a page and return its id.

        ``data`` carries already sanitized ``title``, ``content``, ``status``
        and ``type``.
        """
        page = Page()
        page.title = data["title"]
        page.slug = slugify(data["title"])
        page.content = data.get("content", "")
        page.status = data["status"]
        page.type = data.get("type", "page")
        page.author_id = author_id

        try:
            with transactional():
                db.session.add(page)
                db.session.flush()  # ensures page.id exists
        except SQLAlchemyError as exc:
            logger.error("Failed to insert page %r: %s", page.title, exc)
            raise PageCreationError("Failed to create page") from exc

        return page.id

    def get_page(self, page_id: str) -> Page | None:
        return db.session.get(Page, page_id)

    def get_permalink(self, page_id: str) -> str | None:
        page = self.get_page(page_id)
        if page is None:
            return None

        site_url = current_app.config["SITE_URL"]
        if page.status == "publish":
            return f"{site_url}/{page.slug}/"
        return f"{site_url}/?page_id={page.id}"

    def update_page(self, page_id: str, changes: Dict[str, Any]) -> Page | None:
        """Apply sanitized field changes; returns None when the page does not exist."""
        page = self.get_page(page_id)
        if page is None:
            return None

        for field in ("title", "content"):
            if field in changes:
                setattr(page, field, changes[field])
        if "title" in changes:
            page.slug = slugify(changes["title"])

        with transactional():
            db.session.flush()

        return page
