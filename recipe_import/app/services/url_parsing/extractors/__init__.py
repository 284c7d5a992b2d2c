"""Recipe extractors for structured page data."""

from recipe_import.app.services.url_parsing.extractors.schema_org import (
    build_scraped_recipe,
    extract_json_ld,
    extract_recipe_from_schema_org,
    find_recipe_object,
    ingredient_lines,
    is_recipe_type,
)

__all__ = [
    "build_scraped_recipe",
    "extract_json_ld",
    "extract_recipe_from_schema_org",
    "find_recipe_object",
    "ingredient_lines",
    "is_recipe_type",
]
