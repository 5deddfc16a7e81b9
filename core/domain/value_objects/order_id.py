"""Order identifier helpers."""
import secrets

MAX_ORDER_ID = 2**64 - 1


def generate_order_id() -> int:
    """
    Generate a random unsigned 64-bit order identifier.

    Identifiers are random rather than sequential; a collision surfaces
    as OrderAlreadyExistsError on insert.
    """
    return secrets.randbits(64)


def validate_order_id(value: int) -> int:
    """Return value unchanged if it fits an unsigned 64-bit integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Order id must be an integer: {value!r}")
    if not 0 <= value <= MAX_ORDER_ID:
        raise ValueError(f"Order id out of range (0..2**64-1): {value}")
    return value
