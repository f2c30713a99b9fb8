"""
Sanitizers for page fields and flexible content blocks.

Plain text fields lose all markup; post content keeps a known-safe subset of
HTML. Block values are classified into a small set of kinds and sanitized
structurally, so nested mappings and sequences get the same treatment as the
top level.
"""
from __future__ import annotations

import enum
import logging
import re
from typing import Any

import bleach

from .invariants.block import LAYOUT_KEY

logger = logging.getLogger(__name__)

ALLOWED_POST_TAGS = frozenset({
    "a", "abbr", "b", "blockquote", "br", "caption", "cite", "code", "del",
    "div", "em", "figcaption", "figure", "h1", "h2", "h3", "h4", "h5", "h6",
    "hr", "i", "img", "ins", "li", "ol", "p", "pre", "s", "small", "span",
    "strong", "sub", "sup", "table", "tbody", "td", "tfoot", "th", "thead",
    "tr", "u", "ul",
})

ALLOWED_POST_ATTRIBUTES = {
    "*": ["class", "id", "title"],
    "a": ["href", "rel", "target"],
    "img": ["src", "alt", "width", "height"],
    "td": ["colspan", "rowspan"],
    "th": ["colspan", "rowspan", "scope"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")


def sanitize_text_field(value: Any) -> str:
    """Strip every tag, drop script/style bodies and collapse whitespace.

    Also used for mapping keys inside blocks.
    """
    if value is None:
        return ""

    text = _SCRIPT_STYLE_RE.sub("", str(value))
    text = bleach.clean(text, tags=set(), attributes={}, strip=True, strip_comments=True)
    # Plain text keeps literal ampersands; angle brackets stay escaped
    text = text.replace("&amp;", "&")
    return _WHITESPACE_RE.sub(" ", text).strip()


def sanitize_post_content(value: Any) -> str:
    """Keep the safe subset of post markup, strip the rest."""
    if value is None:
        return ""

    return bleach.clean(
        str(value),
        tags=ALLOWED_POST_TAGS,
        attributes=ALLOWED_POST_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )


class ValueKind(enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    UNSUPPORTED = "unsupported"


class BlockSanitization(str, enum.Enum):
    RECURSIVE = "recursive"
    NONE = "none"


class _Omitted:
    def __repr__(self):
        return "OMITTED"


# Marks a value that was dropped during sanitization.
OMITTED = _Omitted()


def classify(value: Any) -> ValueKind:
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if value is None:
        return ValueKind.NULL
    if isinstance(value, dict):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.UNSUPPORTED


def sanitize_value(value: Any, path: str = "$") -> Any:
    """
    Sanitize one value of a block.

    Returns OMITTED for values that cannot be represented; the caller
    leaves them out of the enclosing mapping or sequence.
    """
    kind = classify(value)

    if kind is ValueKind.TEXT:
        return sanitize_text_field(value)

    if kind in (ValueKind.NUMBER, ValueKind.BOOLEAN, ValueKind.NULL):
        return value

    if kind is ValueKind.MAPPING:
        cleaned = {}
        for key, item in value.items():
            result = sanitize_value(item, f"{path}.{key}")
            if result is not OMITTED:
                cleaned[sanitize_text_field(key)] = result
        return cleaned

    if kind is ValueKind.SEQUENCE:
        cleaned_items = []
        for index, item in enumerate(value):
            result = sanitize_value(item, f"{path}[{index}]")
            if result is not OMITTED:
                cleaned_items.append(result)
        return cleaned_items

    logger.warning(
        "Omitting unsupported value of type %s at %s",
        type(value).__name__,
        path,
    )
    return OMITTED


def sanitize_block(block: dict, path: str = "$") -> dict:
    """Sanitize a block that already carries its layout tag."""
    cleaned = {LAYOUT_KEY: sanitize_text_field(block[LAYOUT_KEY])}

    for key, value in block.items():
        clean_key = sanitize_text_field(key)
        # the layout tag is only ever taken from its own key
        if key == LAYOUT_KEY or clean_key == LAYOUT_KEY:
            continue
        result = sanitize_value(value, f"{path}.{key}")
        if result is not OMITTED:
            cleaned[clean_key] = result

    return cleaned
