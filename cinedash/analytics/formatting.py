"""
Display Formatting

INR currency and Indian digit grouping (1,23,45,678), chart axis labels,
and the "N/A" placeholder for values that cannot be shown.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional
import math

from cinedash.config import get_settings

NOT_AVAILABLE = "N/A"


def is_finite(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def group_indian(digits: str) -> str:
    """Insert Indian-style separators: last three digits, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def _quantize(value: float, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(abs(value))).quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency(amount: Any, symbol: Optional[str] = None) -> str:
    """Whole rupees, e.g. 123456.7 -> "₹1,23,457"."""
    if not is_finite(amount):
        return NOT_AVAILABLE
    symbol = symbol if symbol is not None else get_settings().dashboard.currency_symbol
    amount = float(amount)
    rounded = _quantize(amount, 0)
    sign = "-" if amount < 0 and rounded != 0 else ""
    return f"{sign}{symbol}{group_indian(str(int(rounded)))}"


def format_number(num: Any, max_fraction_digits: int = 3) -> str:
    """Grouped number with trailing fraction zeros dropped."""
    if not is_finite(num):
        return NOT_AVAILABLE
    num = float(num)
    quantized = _quantize(num, max_fraction_digits)
    integer, _, fraction = f"{quantized:f}".partition(".")
    fraction = fraction.rstrip("0")
    sign = "-" if num < 0 and quantized != 0 else ""
    text = group_indian(integer)
    return f"{sign}{text}.{fraction}" if fraction else f"{sign}{text}"


def format_percent(share: Any) -> str:
    """One-decimal percentage, e.g. 4.2857 -> "4.3%"."""
    if not is_finite(share):
        return NOT_AVAILABLE
    share = float(share)
    rounded = _quantize(share, 1)
    sign = "-" if share < 0 and rounded != 0 else ""
    return f"{sign}{rounded:f}%"


def format_growth(growth: float) -> str:
    """YoY badge text, e.g. "+12.5% YoY"."""
    if not is_finite(growth):
        return NOT_AVAILABLE
    if growth > 0:
        return f"+{growth:.1f}% YoY"
    return f"{growth:.1f}% YoY"


def _plain(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def format_axis_tick(value: float, symbol: Optional[str] = None) -> str:
    """Compact revenue tick: ₹1.2M, ₹3.4K, ₹950."""
    symbol = symbol if symbol is not None else get_settings().dashboard.currency_symbol
    if not is_finite(value):
        return NOT_AVAILABLE
    if value >= 1_000_000:
        return f"{symbol}{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{symbol}{value / 1_000:.1f}K"
    return f"{symbol}{_plain(value)}"


def format_axis_label(label: str, period: str) -> str:
    if period == "weekly":
        return label.replace("W", "Wk ", 1)
    return label


def axis_interval(point_count: int) -> int:
    """Tick interval that keeps roughly ten labels on long axes."""
    if point_count <= 20:
        return 0
    return math.ceil(point_count / 10)

