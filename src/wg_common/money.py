"""Fixed-scale decimal utilities for wager prices.

All prices are decimal.Decimal with exactly 2 fractional digits once stored.
Floats are only accepted at the request boundary by to_decimal(), which goes
through str() so the digits the client wrote survive unchanged.
"""

from decimal import Decimal, InvalidOperation

PRICE_SCALE = 2
_QUANT = Decimal(1).scaleb(-PRICE_SCALE)  # Decimal("0.01")
# largest value a NUMERIC(12, 2) column holds
PRICE_MAX = Decimal("9999999999.99")


def to_decimal(value: Decimal | int | str | float) -> Decimal:
    """Coerce request input to Decimal: 10.111 (float) -> Decimal("10.111")."""
    if isinstance(value, float):
        value = str(value)
    try:
        result = value if isinstance(value, Decimal) else Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Price must be finite, got {value!r}")
    return result


def decimal_scale(value: Decimal) -> int:
    """Number of significant fractional digits: 10.10 -> 1, 10.111 -> 3, 100 -> 0."""
    exponent = value.normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        raise ValueError(f"Price must be finite, got {value!r}")
    return max(0, -exponent)


def has_valid_scale(value: Decimal, scale: int = PRICE_SCALE) -> bool:
    return decimal_scale(value) <= scale


def quantize_price(value: Decimal) -> Decimal:
    """Pad to exactly 2 places. Raises if that would need rounding."""
    if not has_valid_scale(value):
        raise ValueError(f"Price {value} has more than {PRICE_SCALE} decimal places")
    return value.quantize(_QUANT)


def min_selling_price(total_wager_value: int, selling_percentage: int) -> Decimal:
    """Lowest allowed ask: floor(total_wager_value * selling_percentage / 100)."""
    return Decimal(total_wager_value * selling_percentage // 100)


def percentage_of(amount: int, total: int) -> int:
    """Integer percentage with floor division: percentage_of(1, 3) -> 33."""
    return amount * 100 // total


def price_to_display(value: Decimal) -> str:
    """Format price for display: Decimal("1234.5") -> '$1,234.50'."""
    q = quantize_price(value)
    if q < 0:
        return f"-${-q:,.2f}"
    return f"${q:,.2f}"
