"""Recipe parsing package.

This package extracts schema.org JSON-LD recipes from HTML and normalizes
ingredient lines into metric amounts with a confidence tier.
"""

from recipe_import.app.services.url_parsing.extractors import (
    extract_json_ld,
    extract_recipe_from_schema_org,
)
from recipe_import.app.services.url_parsing.ingredient_parser import (
    parse_ingredient,
    parse_ingredients,
)
from recipe_import.app.services.url_parsing.metric_converter import (
    convert_range_to_metric,
    convert_to_metric,
    find_ingredient_density,
    format_metric_value,
)
from recipe_import.app.services.url_parsing.models import (
    ConversionConfidence,
    MetricAmount,
    ParsedIngredientLine,
    ScrapedIngredient,
    ScrapedRecipe,
    UnitCategory,
)
from recipe_import.app.services.url_parsing.parsing_utils import (
    classify_unit,
    clean_text,
    extract_image,
    extract_instruction_text,
    extract_source_name,
    is_known_unit,
    normalize_unit,
    normalize_values,
    parse_duration,
    parse_minutes,
    parse_servings,
    replace_fractions,
    replace_word_numbers,
)

__all__ = [
    # Models
    "ConversionConfidence",
    "MetricAmount",
    "ParsedIngredientLine",
    "ScrapedIngredient",
    "ScrapedRecipe",
    "UnitCategory",
    # Extraction
    "extract_json_ld",
    "extract_recipe_from_schema_org",
    # Ingredient parsing
    "parse_ingredient",
    "parse_ingredients",
    # Metric conversion
    "convert_range_to_metric",
    "convert_to_metric",
    "find_ingredient_density",
    "format_metric_value",
    # Parsing utilities
    "classify_unit",
    "clean_text",
    "extract_image",
    "extract_instruction_text",
    "extract_source_name",
    "is_known_unit",
    "normalize_unit",
    "normalize_values",
    "parse_duration",
    "parse_minutes",
    "parse_servings",
    "replace_fractions",
    "replace_word_numbers",
]
