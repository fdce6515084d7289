"""
Currency amount helpers.

Amounts are always Decimal in whole cents. Floats coming from
JSON are converted through str so 0.1 stays 0.1. Nothing here
rounds: a fraction of a cent is an error.
"""

from decimal import Decimal, InvalidOperation

CENT = Decimal("0.01")


def parse_amount(value) -> Decimal:
    """Convert a number to a finite Decimal, unchanged. ValueError otherwise."""
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Not a monetary amount: {value!r}") from None
    if not value.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    return value


def is_whole_cents(value: Decimal) -> bool:
    try:
        return value == value.quantize(CENT)
    except InvalidOperation:
        # too many digits to express in cents
        return False


def to_money(value) -> Decimal:
    """
    Convert a number to a two-place Decimal.

    Raises ValueError for anything that is not a finite number
    and for amounts with a fraction of a cent.
    """
    value = parse_amount(value)
    if not is_whole_cents(value):
        raise ValueError(f"Amount has a fraction of a cent: {value!r}")
    return value.quantize(CENT)
