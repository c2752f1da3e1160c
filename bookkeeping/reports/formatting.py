"""Number formatting shared by reports and the formula sheet."""

from decimal import ROUND_HALF_UP, Decimal, localcontext

_CENT = Decimal("0.01")


def _round(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_number(value: Decimal) -> str:
    """Thousands separators, two decimal places: 1,234.50"""
    return f"{_round(value):,.2f}"


def format_currency(value: Decimal, symbol: str = "R") -> str:
    """R1,234.50"""
    return f"{symbol}{format_number(value)}"


def format_percent(value: Decimal) -> str:
    """12.34%"""
    return f"{format_number(value)}%"


def format_units(value: Decimal) -> str:
    """250.00 units"""
    return f"{format_number(value)} units"
