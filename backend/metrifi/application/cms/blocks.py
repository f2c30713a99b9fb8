import copy
import logging
from typing import Any, Dict, List

from metrifi.domain.invariants.block import LAYOUT_KEY, assert_block_layout
from metrifi.domain.invariants.exceptions import InvariantViolation
from metrifi.domain.sanitize import BlockSanitization, sanitize_block

logger = logging.getLogger(__name__)


def extract_content_blocks(data: Dict[str, Any], field_name: str) -> List[Any]:
    """Return ``acf.<field_name>`` from a request body, or [] when absent or not a list."""
    acf = data.get("acf")
    if not isinstance(acf, dict):
        return []

    blocks = acf.get(field_name)
    if blocks is None:
        return []
    if not isinstance(blocks, list):
        logger.warning("Ignoring acf.%s: expected a list, got %s", field_name, type(blocks).__name__)
        return []
    return blocks


def prepare_content_blocks(blocks: List[Any], policy: BlockSanitization) -> List[Dict[str, Any]]:
    """
    Drop blocks without a layout tag and sanitize the rest, keeping order.
    """
    prepared = []

    for index, block in enumerate(blocks):
        try:
            assert_block_layout(block)
        except InvariantViolation as exc:
            logger.warning("Missing %s in block %d, skipping: %s (%r)", LAYOUT_KEY, index, exc, block)
            continue

        if policy is BlockSanitization.NONE:
            prepared.append(copy.deepcopy(block))
        else:
            prepared.append(sanitize_block(block, path=f"content_blocks[{index}]"))

    return prepared
