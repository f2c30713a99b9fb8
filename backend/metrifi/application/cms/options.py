from dataclasses import dataclass
from typing import Any, Mapping

from metrifi.domain.invariants.exceptions import InvariantViolation
from metrifi.domain.invariants.page import assert_page_status
from metrifi.domain.sanitize import BlockSanitization
from metrifi.errors import ImproperlyConfigured


@dataclass(frozen=True)
class PageCreatorOptions:
    """
    Which optional behaviors page writes use.

    Built from app config and handed to the creator/updater instead of
    checking for optional integrations inside them.
    """

    page_status: str = "draft"
    block_sanitization: BlockSanitization = BlockSanitization.RECURSIVE
    field_writes_enabled: bool = True
    field_name: str = "content_blocks"
    fallback_field_key: str = "field_5b92ba6a9b055"

    def __post_init__(self):
        try:
            assert_page_status(self.page_status)
        except InvariantViolation as exc:
            raise ImproperlyConfigured(f"PAGE_STATUS: {exc}") from exc

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "PageCreatorOptions":
        """
        Raises:
            ImproperlyConfigured: PAGE_STATUS or BLOCK_SANITIZATION holds an unknown value
        """
        policy = config.get("BLOCK_SANITIZATION", "recursive")
        try:
            block_sanitization = BlockSanitization(policy)
        except ValueError as exc:
            raise ImproperlyConfigured(
                f"BLOCK_SANITIZATION must be one of {[p.value for p in BlockSanitization]}, got {policy!r}."
            ) from exc

        return cls(
            page_status=config.get("PAGE_STATUS", "draft"),
            block_sanitization=block_sanitization,
            field_writes_enabled=bool(config.get("FIELD_WRITES_ENABLED", True)),
            field_name=config.get("CONTENT_BLOCKS_FIELD", "content_blocks"),
            fallback_field_key=config.get("FALLBACK_FIELD_KEY", "field_5b92ba6a9b055"),
        )
