"""Conversion between text amounts and integer minor units."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from app.config import settings


def to_minor_units(amount: str | Decimal, minor_unit: int | None = None) -> int:
    """Convert a major-unit amount ("20.50") into integer minor units (2050).

    Raises:
        ValueError: If the amount is not a finite number
    """
    if minor_unit is None:
        minor_unit = settings.currency_minor_unit
    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {amount!r}")
    try:
        scaled = value.scaleb(minor_unit).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # Exceeds the decimal context precision
        raise ValueError(f"Amount out of range: {amount!r}") from e
    return int(scaled)