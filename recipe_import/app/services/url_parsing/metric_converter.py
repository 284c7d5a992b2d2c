"""Imperial to metric conversion for ingredient quantities."""

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Optional, Union

from recipe_import.app.core.errors import require_type
from recipe_import.app.services.url_parsing.constants import (
    DENSITY_KEYS_BY_LENGTH,
    INGREDIENT_DENSITY,
    LENGTH_TO_CM,
    ML_PER_CUP,
    SPOON_UNITS,
    VOLUME_TO_ML,
    WEIGHT_TO_G,
)
from recipe_import.app.services.url_parsing.models import (
    ConversionConfidence,
    MetricAmount,
    UnitCategory,
)
from recipe_import.app.services.url_parsing.parsing_utils import (
    classify_unit,
    clean_text,
    format_decimal,
    normalize_unit,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]

_DENSITY_PATTERNS = tuple(
    (key, re.compile(rf"(?<![\w-]){re.escape(key)}(?![\w-])")) for key in DENSITY_KEYS_BY_LENGTH
)


class _ConversionPlan(NamedTuple):
    factor: float
    suffix: str
    confidence: ConversionConfidence


def format_metric_value(value: float) -> str:
    """Round to a whole number from 10 up, otherwise to one decimal without a trailing ".0"."""
    quantity = Decimal(str(value))
    if quantity >= 10:
        return format(quantity.to_integral_value(rounding=ROUND_HALF_UP), "f")
    rounded = format(quantity.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP), "f")
    return rounded[:-2] if rounded.endswith(".0") else rounded


def find_ingredient_density(ingredient_name: str) -> Optional[int]:
    """Look up grams per cup for an ingredient name.

    Tries an exact match, then the longest table key found as whole words in
    the name, then the first word of the name on its own.
    """
    require_type(ingredient_name, "ingredient_name", str, "a string")
    name = clean_text(ingredient_name).lower()
    if not name:
        return None
    if name in INGREDIENT_DENSITY:
        return INGREDIENT_DENSITY[name]
    for key, pattern in _DENSITY_PATTERNS:
        if pattern.search(name):
            return INGREDIENT_DENSITY[key]
    return INGREDIENT_DENSITY.get(name.split()[0])


def _plan_conversion(unit: str, ingredient_name: str) -> Optional[_ConversionPlan]:
    category = classify_unit(unit)
    canonical = normalize_unit(unit)
    if category == UnitCategory.IMPERIAL_WEIGHT:
        return _ConversionPlan(WEIGHT_TO_G[canonical], "g", ConversionConfidence.HIGH)
    if category == UnitCategory.IMPERIAL_LENGTH:
        return _ConversionPlan(LENGTH_TO_CM[canonical], "cm", ConversionConfidence.HIGH)
    if category != UnitCategory.IMPERIAL_VOLUME:
        return None

    ml_per_unit = VOLUME_TO_ML[canonical]
    density = find_ingredient_density(ingredient_name)
    if density is not None:
        return _ConversionPlan(ml_per_unit / ML_PER_CUP * density, "g", ConversionConfidence.HIGH)
    confidence = ConversionConfidence.HIGH if canonical in SPOON_UNITS else ConversionConfidence.MEDIUM
    return _ConversionPlan(ml_per_unit, "ml", confidence)


def _unconverted(amount_text: str, unit: str) -> MetricAmount:
    category = classify_unit(unit)
    if category == UnitCategory.METRIC:
        return MetricAmount(amount=f"{amount_text}{normalize_unit(unit)}", confidence=ConversionConfidence.HIGH)
    return MetricAmount(amount=f"{amount_text} {unit}".strip(), confidence=ConversionConfidence.LOW)


def convert_to_metric(amount: Number, unit: str, ingredient_name: str) -> MetricAmount:
    """Convert an amount in an imperial unit to grams, millilitres or centimetres.

    Weight and length convert directly. Volume converts to grams when the
    ingredient has a density entry, otherwise to millilitres (high confidence
    only for teaspoons and tablespoons). Metric units are returned as-is and
    unrecognized units come back unchanged with low confidence.
    """
    require_type(amount, "amount", (int, float), "a number")
    require_type(unit, "unit", str, "a string")
    require_type(ingredient_name, "ingredient_name", str, "a string")

    plan = _plan_conversion(unit, ingredient_name)
    if plan is None:
        logger.debug("No metric conversion for unit %r", unit)
        return _unconverted(format_decimal(amount), unit)

    value = amount * plan.factor
    if not math.isfinite(value):
        logger.debug("Amount %s %s is out of range for conversion", amount, unit)
        return MetricAmount(amount=f"{format_decimal(amount)} {unit}", confidence=ConversionConfidence.LOW)

    rendered = f"{format_metric_value(value)}{plan.suffix}"
    logger.debug("Converted %s %s %r -> %s (%s)", amount, unit, ingredient_name, rendered, plan.confidence.value)
    return MetricAmount(amount=rendered, confidence=plan.confidence)


def convert_range_to_metric(
    low: Number,
    high: Number,
    separator: str,
    unit: str,
    ingredient_name: str,
) -> MetricAmount:
    """Convert a range such as "1-2 cups" or "2 to 3 tbsp".

    Confidence is decided on the midpoint; each endpoint is rendered with the
    same per-unit factor and the original separator style is kept. Teaspoon
    and tablespoon ranges always render in millilitres, even for ingredients
    with a density entry, so "2 tbsp butter" gives "28g" while "2-2 tbsp
    butter" gives "30-30ml".
    """
    require_type(low, "low", (int, float), "a number")
    require_type(high, "high", (int, float), "a number")
    require_type(separator, "separator", str, "a string")

    midpoint = convert_to_metric((low + high) / 2, unit, ingredient_name)
    plan = _plan_conversion(unit, ingredient_name)

    if plan is None:
        low_text, high_text = format_decimal(low), format_decimal(high)
        joined = _join_range(low_text, high_text, separator)
        return _unconverted(joined, unit)

    canonical = normalize_unit(unit)
    if canonical in SPOON_UNITS:
        plan = _ConversionPlan(VOLUME_TO_ML[canonical], "ml", plan.confidence)

    low_value, high_value = low * plan.factor, high * plan.factor
    if not (math.isfinite(low_value) and math.isfinite(high_value)):
        logger.debug("Range %s-%s %s is out of range for conversion", low, high, unit)
        joined = _join_range(format_decimal(low), format_decimal(high), separator)
        return MetricAmount(amount=f"{joined} {unit}", confidence=ConversionConfidence.LOW)

    joined = _join_range(format_metric_value(low_value), format_metric_value(high_value), separator)
    return MetricAmount(amount=f"{joined}{plan.suffix}", confidence=midpoint.confidence)


def _join_range(low_text: str, high_text: str, separator: str) -> str:
    if separator.strip().lower() == "to":
        return f"{low_text} to {high_text}"
    return f"{low_text}-{high_text}"
