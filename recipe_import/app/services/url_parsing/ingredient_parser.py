"""Ingredient line parsing with metric conversion."""

import logging
import math
import re
from typing import Iterable, List

from recipe_import.app.core.errors import require_type
from recipe_import.app.services.url_parsing.constants import UNIT_ALIASES
from recipe_import.app.services.url_parsing.metric_converter import (
    convert_range_to_metric,
    convert_to_metric,
)
from recipe_import.app.services.url_parsing.models import (
    ConversionConfidence,
    ParsedIngredientLine,
    UnitCategory,
)
from recipe_import.app.services.url_parsing.parsing_utils import (
    classify_unit,
    clean_text,
    normalize_unit,
    normalize_values,
)

logger = logging.getLogger(__name__)

_NUMBER = r"\d+(?:\.\d+)?|\.\d+"
_RANGE_RE = re.compile(
    rf"^(?P<low>{_NUMBER})(?:\s*(?P<dash>[-–])\s*|\s+(?P<to>to)\s+)(?P<high>{_NUMBER})",
    re.IGNORECASE | re.ASCII,
)
_AMOUNT_RE = re.compile(rf"^(?P<value>{_NUMBER})", re.ASCII)
# Longest spellings first so "fl oz" is tried before "floz" and "tbsp" before "t".
_UNIT_RE = re.compile(
    r"^(?P<unit>"
    + "|".join(re.escape(alias) for alias in sorted(UNIT_ALIASES, key=lambda a: (-len(a), a)))
    + r")(?P<dot>\.)?(?![A-Za-z])",
    re.IGNORECASE,
)
_LEADING_OF_RE = re.compile(r"^of\s+", re.IGNORECASE)


def _clean_name(text: str) -> str:
    return clean_text(_LEADING_OF_RE.sub("", text.strip()))


def parse_ingredient(line: str) -> ParsedIngredientLine:
    """Split a raw ingredient line into amount and name, converting imperial units.

    Lines without a leading quantity are returned whole as the name. Imperial
    amounts are converted to metric; metric and count quantities are kept in
    their own unit.
    """
    require_type(line, "line", str, "a string")
    normalized = normalize_values(line.strip())

    range_match = _RANGE_RE.match(normalized)
    amount_match = range_match or _AMOUNT_RE.match(normalized)
    if not amount_match:
        logger.debug("No quantity in ingredient %r", line)
        return ParsedIngredientLine(original=line, amount="", name=line.strip())

    amount_text = amount_match.group(0).strip()
    remainder = normalized[amount_match.end():].lstrip()

    unit_match = _UNIT_RE.match(remainder)
    unit = normalize_unit(unit_match.group(0)) if unit_match else None
    if unit is None:
        return ParsedIngredientLine(original=line, amount=amount_text, name=_clean_name(remainder))

    name = _clean_name(remainder[unit_match.end():])
    if classify_unit(unit) in (UnitCategory.METRIC, UnitCategory.UNRECOGNIZED):
        return ParsedIngredientLine(original=line, amount=f"{amount_text}{unit}", name=name)

    if range_match:
        values = [float(range_match.group("low")), float(range_match.group("high"))]
    else:
        values = [float(amount_match.group("value"))]
    if not all(math.isfinite(value) for value in values):
        logger.debug("Quantity in %r is too large to convert", line)
        return ParsedIngredientLine(
            original=line,
            amount=f"{amount_text} {unit}",
            name=name,
            confidence=ConversionConfidence.LOW,
        )

    if range_match:
        separator = range_match.group("to") or "-"
        metric = convert_range_to_metric(values[0], values[1], separator, unit, name)
    else:
        metric = convert_to_metric(values[0], unit, name)

    logger.debug("Ingredient %r -> %s %r (%s)", line, metric.amount, name, metric.confidence)
    return ParsedIngredientLine(
        original=line,
        amount=metric.amount,
        name=name,
        converted=metric.confidence != ConversionConfidence.LOW,
        confidence=metric.confidence,
    )


def parse_ingredients(lines: Iterable[str]) -> List[ParsedIngredientLine]:
    """Parse a batch of ingredient lines, dropping blank ones."""
    parsed: List[ParsedIngredientLine] = []
    for idx, line in enumerate(lines):
        require_type(line, f"lines[{idx}]", str, "a string")
        if not line.strip():
            logger.debug("Ingredient %d: string was empty after cleaning", idx)
            continue
        parsed.append(parse_ingredient(line))
    logger.info("Parsed %d ingredient lines", len(parsed))
    return parsed
