import logging
from typing import Any, Dict

from metrifi.application.cms.blocks import extract_content_blocks, prepare_content_blocks
from metrifi.application.cms.field_key import resolve_field_key
from metrifi.application.cms.options import PageCreatorOptions
from metrifi.domain.sanitize import sanitize_post_content, sanitize_text_field
from metrifi.errors import InvalidParam, NotFound
from metrifi.models.page import Page
from metrifi.services.content import ContentStore
from metrifi.services.fields import FieldStore
from metrifi.utils.audit import log_action
from metrifi.utils.transaction import transactional

logger = logging.getLogger(__name__)


def update_page(
    *,
    page_id: str,
    data: Dict[str, Any],
    content_store: ContentStore,
    field_store: FieldStore | None,
    options: PageCreatorOptions,
) -> Page:
    """
    Update a page's core fields and, when sent, its content blocks.

    Design rules:
    - Same sanitization as page creation
    - Field write failures are logged, never raised
    """
    if not isinstance(data, dict):
        raise InvalidParam("Request body must be a JSON object.")

    if content_store.get_page(page_id) is None:
        raise NotFound()

    changes: Dict[str, Any] = {}

    if "title" in data:
        title = data["title"]
        if not isinstance(title, str) or not title.strip():
            raise InvalidParam("Title cannot be empty.")
        changes["title"] = sanitize_text_field(title)

    if "content" in data:
        changes["content"] = sanitize_post_content(data["content"] or "")

    page = content_store.update_page(page_id, changes)

    blocks_sent = isinstance(data.get("acf"), dict) and options.field_name in data["acf"]
    if blocks_sent and field_store is not None and options.field_writes_enabled:
        blocks = extract_content_blocks(data, options.field_name)
        field_key = resolve_field_key(
            options.field_name,
            field_store=field_store,
            fallback_key=options.fallback_field_key,
        )
        rows = prepare_content_blocks(blocks, options.block_sanitization)
        if not field_store.write_field(field_key, rows, page_id):
            logger.warning("Failed to update field %s for page ID %s", field_key, page_id)
        else:
            changes[options.field_name] = len(rows)

    with transactional():
        log_action(
            action="page.update",
            entity_type="page",
            entity_id=page_id,
            payload={"fields": sorted(changes)},
        )

    return page
