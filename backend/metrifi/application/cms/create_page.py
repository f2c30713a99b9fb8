import logging
from typing import Any, Dict

from metrifi.application.cms.blocks import extract_content_blocks, prepare_content_blocks
from metrifi.application.cms.field_key import resolve_field_key
from metrifi.application.cms.options import PageCreatorOptions
from metrifi.domain.sanitize import sanitize_post_content, sanitize_text_field
from metrifi.errors import InvalidParam, PostCreationFailed
from metrifi.services.content import ContentStore, PageCreationError
from metrifi.services.fields import FieldStore
from metrifi.services.identity import Principal
from metrifi.utils.audit import log_action
from metrifi.utils.transaction import transactional

logger = logging.getLogger(__name__)


class PageCreator:
    """
    Creates a page and attaches its flexible content blocks.

    A page that was created is never rolled back: failing to store the
    blocks only logs a warning, and the response echoes whatever the
    field store holds afterwards.
    """

    def __init__(
        self,
        *,
        content_store: ContentStore,
        field_store: FieldStore | None,
        options: PageCreatorOptions,
    ):
        self.content_store = content_store
        self.field_store = field_store
        self.options = options

    def create(self, data: Dict[str, Any], principal: Principal | None = None) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise InvalidParam("Request body must be a JSON object.")

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise InvalidParam("Title is required.")

        page_data = {
            "title": sanitize_text_field(title),
            "content": sanitize_post_content(data.get("content") or ""),
            "status": self.options.page_status,
            "type": "page",
        }

        try:
            page_id = self.content_store.create_page(
                page_data,
                author_id=principal.user_id if principal else None,
            )
        except PageCreationError as exc:
            raise PostCreationFailed() from exc

        with transactional():
            log_action(
                action="page.create",
                entity_type="page",
                entity_id=page_id,
                payload={
                    "title": page_data["title"],
                    "status": page_data["status"],
                },
            )

        blocks = extract_content_blocks(data, self.options.field_name)
        if blocks and self._field_writes_available():
            self._save_blocks(page_id, blocks)

        return {
            "id": page_id,
            "title": page_data["title"],
            "acf": {
                self.options.field_name: self._read_back(page_id),
            },
            "link": self.content_store.get_permalink(page_id),
        }

    def _field_writes_available(self) -> bool:
        return self.field_store is not None and self.options.field_writes_enabled

    def _save_blocks(self, page_id, blocks):
        field_key = resolve_field_key(
            self.options.field_name,
            field_store=self.field_store,
            fallback_key=self.options.fallback_field_key,
        )
        rows = prepare_content_blocks(blocks, self.options.block_sanitization)

        if not self.field_store.write_field(field_key, rows, page_id):
            logger.warning("Failed to update field %s for page ID %s: %r", field_key, page_id, rows)

    def _read_back(self, page_id):
        if self.field_store is None:
            return None
        return self.field_store.read_field(self.options.field_name, page_id)
