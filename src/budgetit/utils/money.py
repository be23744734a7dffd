"""Money parsing and formatting utilities (Brazilian real)."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_brl(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "R$ 1.234,56"
    - "1.234,56"
    - "-R$ 50,00"
    - "1234.56" (plain decimal notation)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("-"):
        is_negative = True
        amount_str = amount_str[1:]

    # Remove currency symbol and non-breaking spaces emitted by formatters
    amount_str = re.sub(r"R\$", "", amount_str).replace("\xa0", " ").strip()

    if "," in amount_str:
        # Brazilian notation: dots group thousands, comma marks cents
        amount_str = amount_str.replace(".", "").replace(",", ".")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    return -amount if is_negative else amount


def to_decimal(value) -> Decimal:
    """Coerce a number or a BRL string into a Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        return parse_brl(value)
    raise ValueError(f"Could not parse amount '{value}'")


def format_brl(amount: Decimal) -> str:
    """Format an amount as BRL currency, e.g. ``R$ 1.000,00``."""
    quantized = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    grouped = f"{abs(quantized):,.2f}"
    # Swap US separators for Brazilian ones
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {grouped}"
