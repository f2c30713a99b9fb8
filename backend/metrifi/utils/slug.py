import re
import unicodedata

_STRIP_RE = re.compile(r"[^\w\s-]")
_DASH_RE = re.compile(r"[-\s_]+")


def slugify(value, fallback="page"):
    """Lowercase, ASCII-only, dash separated."""
    value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    value = _STRIP_RE.sub("", value).strip().lower()
    value = _DASH_RE.sub("-", value).strip("-")
    return value[:200] or fallback
