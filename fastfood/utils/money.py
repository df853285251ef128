from decimal import Decimal, ROUND_HALF_EVEN

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_cents(value) -> Decimal:
    """Fixed-point, two decimals, banker's rounding."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_EVEN)

# Largest amount a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")
