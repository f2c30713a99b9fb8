import logging

from metrifi.services.fields import FieldStore

logger = logging.getLogger(__name__)


def resolve_field_key(
    field_name: str,
    *,
    field_store: FieldStore | None,
    fallback_key: str,
) -> str:
    """
    Look up the stable key of a named field, falling back to a fixed key.

    Never raises; a missing store, a missing definition or a definition
    without a key all produce ``fallback_key``.
    """
    key = field_store.resolve_key(field_name) if field_store is not None else None

    if not key:
        logger.warning(
            'Could not dynamically retrieve field key for "%s". Using hardcoded value: %s',
            field_name,
            fallback_key,
        )
        return fallback_key

    return key
