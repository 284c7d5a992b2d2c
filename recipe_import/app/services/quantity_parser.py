import re
from decimal import Decimal, InvalidOperation
from typing import Optional

_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$", re.ASCII)
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)$", re.ASCII)


def parse_quantity_display(raw: Optional[str]) -> Optional[Decimal]:
    """Parse "2", "0.5", "1/2" or "1 1/2" into a Decimal; None when not a quantity."""
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    # Mixed numbers like "1 1/2"
    match = _MIXED_RE.match(value)
    if match:
        whole, num, denom = (Decimal(part) for part in match.groups())
        if denom == 0:
            return None
        return whole + (num / denom)

    # Fractions like "1/2"
    match = _FRACTION_RE.match(value)
    if match:
        num, denom = (Decimal(part) for part in match.groups())
        if denom == 0:
            return None
        return num / denom

    # Whole or decimal numbers
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None
