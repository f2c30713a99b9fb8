from .exceptions import InvariantViolation

LAYOUT_KEY = "acf_fc_layout"


def assert_block_layout(block):
    """A flexible content block must be a mapping carrying its layout tag."""
    if not isinstance(block, dict):
        raise InvariantViolation(
            f"Block must be an object, got {type(block).__name__}."
        )

    if block.get(LAYOUT_KEY) is None:
        raise InvariantViolation(f"Block is missing {LAYOUT_KEY}.")
