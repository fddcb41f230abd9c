"""
Amounts are stored as numeric(15,2) and handed to callers as plain numbers.
"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_decimal(amount) -> Decimal:
    """Normalise an incoming amount to two decimal places."""
    if isinstance(amount, float):
        # go through str so 0.1 stays 0.1 and not 0.1000000000000000055...
        amount = repr(amount)
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def to_number(value) -> float:
    if value is None:
        return 0.0
    return float(value)
