from .exceptions import InvariantViolation

ALLOWED_PAGE_STATUSES = {"draft", "publish"}


def assert_page_status(status):
    if status not in ALLOWED_PAGE_STATUSES:
        raise InvariantViolation(
            f"Page status must be one of {sorted(ALLOWED_PAGE_STATUSES)}, got {status!r}."
        )
