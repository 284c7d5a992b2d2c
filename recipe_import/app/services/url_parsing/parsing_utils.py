"""General parsing utilities for recipe extraction."""

import math
import re
from typing import Any, List, Optional
from urllib.parse import urlparse

from recipe_import.app.core.config import get_settings
from recipe_import.app.core.errors import require_type
from recipe_import.app.services.url_parsing.constants import (
    CANONICAL_UNITS,
    FRACTION_CHARS,
    FRACTIONS,
    IMPERIAL_LENGTH_UNITS,
    IMPERIAL_VOLUME_UNITS,
    IMPERIAL_WEIGHT_UNITS,
    METRIC_UNITS,
    SOURCE_NAME_OVERRIDES,
    TEXT_FRACTIONS,
    UNIT_ALIASES,
    WORD_NUMBERS,
)
from recipe_import.app.services.url_parsing.models import UnitCategory

_WORD_NUMBER_PATTERNS = tuple(
    (re.compile(rf"(^|\s){re.escape(word)}(?=\s|$)", re.IGNORECASE), str(value))
    for word, value in sorted(WORD_NUMBERS.items(), key=lambda item: (-len(item[0]), item[0]))
)
_GLYPH_MIXED_RE = re.compile(rf"(?<![\d.])(\d+)\s*([{FRACTION_CHARS}])")
_TEXT_MIXED_RE = re.compile(r"(?<![\d./])(\d+)\s+(\d+/\d+)(?![\d/])")
_STANDALONE_FRACTION_RE = re.compile(
    "|".join(
        [rf"(?<![\d/]){re.escape(token)}(?![\d/])" for token in sorted(TEXT_FRACTIONS, key=len, reverse=True)]
        + [rf"[{FRACTION_CHARS}]"]
    )
)
_ISO_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?", re.IGNORECASE | re.ASCII)
_DIGITS_RE = re.compile(r"\d+", re.ASCII)
_SOURCE_TLD_RE = re.compile(r"\.(com|org|net|co\.uk|io)$")


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def format_decimal(value: float) -> str:
    """Render a normalized quantity with at most three decimals."""
    return f"{value:.3f}".rstrip("0").rstrip(".")


# --- ValueNormalizer ---


def replace_word_numbers(text: str) -> str:
    """Replace spelled-out quantities ("two", "a", "an") with digits."""
    require_type(text, "text", str, "a string")
    for pattern, digits in _WORD_NUMBER_PATTERNS:
        text = pattern.sub(lambda m, d=digits: f"{m.group(1)}{d}", text)
    return text


def replace_fractions(text: str) -> str:
    """Rewrite mixed numbers and fractions as decimal text.

    Mixed numbers are collapsed first ("1½" and "2 1/2"), then any remaining
    fraction is replaced on its own. Values come from the FRACTIONS table, so
    thirds are 0.33 and 0.67; text fractions outside the table are kept.
    """
    require_type(text, "text", str, "a string")

    def _glyph_mixed(match: re.Match) -> str:
        return format_decimal(int(match.group(1)) + FRACTIONS[match.group(2)])

    def _text_mixed(match: re.Match) -> str:
        fraction = FRACTIONS.get(match.group(2))
        if fraction is None:
            return match.group(0)
        return format_decimal(int(match.group(1)) + fraction)

    text = _GLYPH_MIXED_RE.sub(_glyph_mixed, text)
    text = _TEXT_MIXED_RE.sub(_text_mixed, text)
    return _STANDALONE_FRACTION_RE.sub(lambda m: format_decimal(FRACTIONS[m.group(0)]), text)


def normalize_values(text: str) -> str:
    """Apply the word-number pass followed by the fraction pass."""
    return replace_fractions(replace_word_numbers(text))


# --- UnitResolver ---


def normalize_unit(token: str) -> Optional[str]:
    """Map a unit spelling to its canonical symbol, or None when unknown."""
    require_type(token, "unit", str, "a string")
    candidate = clean_text(token)
    if not candidate:
        return None
    for attempt in (candidate, candidate.lower()):
        if attempt in UNIT_ALIASES:
            return UNIT_ALIASES[attempt]
    if candidate.endswith("."):
        trimmed = candidate[:-1]
        for attempt in (trimmed, trimmed.lower()):
            if attempt in UNIT_ALIASES:
                return UNIT_ALIASES[attempt]
    return None


def is_known_unit(unit: str) -> bool:
    """Check if a unit string is a recognized cooking unit."""
    return normalize_unit(unit) is not None


def classify_unit(unit: str) -> UnitCategory:
    """Return the measurement family of a canonical unit or alias."""
    canonical = unit if unit in CANONICAL_UNITS else normalize_unit(unit)
    if canonical in IMPERIAL_VOLUME_UNITS:
        return UnitCategory.IMPERIAL_VOLUME
    if canonical in IMPERIAL_WEIGHT_UNITS:
        return UnitCategory.IMPERIAL_WEIGHT
    if canonical in IMPERIAL_LENGTH_UNITS:
        return UnitCategory.IMPERIAL_LENGTH
    if canonical in METRIC_UNITS:
        return UnitCategory.METRIC
    return UnitCategory.UNRECOGNIZED


# --- DurationParser ---


def parse_duration(duration: Optional[str]) -> Optional[int]:
    """Parse "45" or an ISO-8601 time duration such as "PT1H30M" into minutes.

    Seconds are rounded to the nearest minute. Returns None for empty,
    unparseable or non-positive durations.
    """
    if duration is None:
        return None
    require_type(duration, "duration", str, "a string")
    text = duration.strip()
    if not text:
        return None
    try:
        if _DIGITS_RE.fullmatch(text):
            total_minutes = int(text)
        else:
            match = _ISO_DURATION_RE.fullmatch(text)
            if not match:
                return None
            hours = int(match.group(1) or 0)
            minutes = int(match.group(2) or 0)
            seconds = int(match.group(3) or 0)
            total_minutes = hours * 60 + minutes + (seconds + 30) // 60
    except ValueError:
        # digit runs past the interpreter's int conversion limit
        return None
    return total_minutes if total_minutes > 0 else None


def parse_minutes(value: Any) -> Optional[int]:
    """Parse a schema.org time value, which is usually text but may be a number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value) if value > 0 else None
    if isinstance(value, str):
        return parse_duration(value)
    return None


# --- schema.org field helpers ---


def parse_servings(value: Any) -> Optional[int]:
    """Parse servings from a recipeYield value (number, text or list)."""
    while isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        # json.loads accepts NaN, Infinity and 1e999
        if isinstance(value, float) and not math.isfinite(value):
            return None
        servings = int(value)
    elif isinstance(value, str):
        match = _DIGITS_RE.search(value)
        if not match:
            return None
        try:
            servings = int(match.group())
        except ValueError:
            return None
    else:
        return None
    return servings if servings > 0 else None


def _image_url_from_object(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        url = value.get("url")
        if isinstance(url, str) and url.strip():
            return url.strip()
    return None


def extract_image(value: Any) -> Optional[str]:
    """Extract image URL from various schema.org image formats."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, list):
        if not value:
            return None
        first = value[0]
        if isinstance(first, str):
            return first.strip() or None
        return _image_url_from_object(first)
    return _image_url_from_object(value)


def extract_instruction_text(instructions: Any) -> List[str]:
    """Flatten recipeInstructions into a list of step strings.

    A bare string is split on newlines. Lists keep their strings as-is,
    HowToSection objects contribute their nested steps and HowToStep objects
    their text (or name). Blank entries are dropped.
    """
    steps: List[str] = []
    if isinstance(instructions, str):
        lines = [clean_text(line) for line in instructions.splitlines()]
        steps.extend(line for line in lines if line)
        if not steps and instructions.strip():
            steps.append(instructions.strip())
    else:
        _flatten_instruction_entries(instructions, steps, get_settings().json_ld_max_depth)
    return steps


def _flatten_instruction_entries(entries: Any, steps: List[str], depth_left: int) -> None:
    if depth_left < 0:
        return
    if isinstance(entries, dict):
        entries = [entries]
    if not isinstance(entries, list):
        return
    for entry in entries:
        if isinstance(entry, str):
            if entry.strip():
                steps.append(entry.strip())
        elif isinstance(entry, list):
            _flatten_instruction_entries(entry, steps, depth_left - 1)
        elif isinstance(entry, dict):
            if "itemListElement" in entry:
                _flatten_instruction_entries(entry.get("itemListElement"), steps, depth_left - 1)
                continue
            for key in ("text", "name"):
                value = entry.get(key)
                if isinstance(value, str) and value.strip():
                    steps.append(value.strip())
                    break


def extract_source_name(url: str) -> str:
    """Build a readable site name from a URL's hostname.

    >>> extract_source_name("https://www.seriouseats.com/recipe")
    'Seriouseats'
    >>> extract_source_name("https://cooking.nytimes.com/recipes/1")
    'Cooking NYTimes'
    """
    require_type(url, "url", str, "a string")
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None
    if not hostname:
        return "Unknown Source"
    name = re.sub(r"^www\.", "", hostname)
    name = _SOURCE_TLD_RE.sub("", name)
    parts = []
    for part in name.split("."):
        override = SOURCE_NAME_OVERRIDES.get(part.lower())
        parts.append(override or part[:1].upper() + part[1:])
    return " ".join(parts)
