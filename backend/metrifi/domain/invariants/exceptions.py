class InvariantViolation(Exception):
    """Raised when content does not satisfy a domain invariant."""
