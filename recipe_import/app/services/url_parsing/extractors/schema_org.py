"""Schema.org JSON-LD recipe extraction."""

import json
import logging
import re
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from recipe_import.app.core.config import get_settings
from recipe_import.app.core.errors import require_type
from recipe_import.app.services.url_parsing.ingredient_parser import parse_ingredients
from recipe_import.app.services.url_parsing.models import ScrapedIngredient, ScrapedRecipe
from recipe_import.app.services.url_parsing.parsing_utils import (
    clean_text,
    extract_image,
    extract_instruction_text,
    extract_source_name,
    parse_minutes,
    parse_servings,
)

logger = logging.getLogger(__name__)

_JSON_LD_TYPE_RE = re.compile(r"^\s*application/ld\+json\s*(;.*)?$", re.IGNORECASE)
_RECIPE_TYPES = {"recipe", "http://schema.org/recipe", "https://schema.org/recipe"}


def is_recipe_type(value: Any) -> bool:
    """True when a JSON-LD node's @type (string or list) names Recipe."""
    if not isinstance(value, dict):
        return False
    obj_type = value.get("@type")
    types = [obj_type] if isinstance(obj_type, str) else obj_type
    if not isinstance(types, list):
        return False
    return any(isinstance(t, str) and t.strip().lower() in _RECIPE_TYPES for t in types)


def find_recipe_object(data: Any, max_depth: Optional[int] = None, _depth: int = 0) -> Optional[dict]:
    """Depth-first search of a decoded JSON-LD value for the first Recipe node.

    The value itself is checked first, then the entries of its @graph, then
    the items of a top-level list.
    """
    if max_depth is None:
        max_depth = get_settings().json_ld_max_depth
    if _depth > max_depth:
        logger.debug("JSON-LD nesting deeper than %d ignored", max_depth)
        return None

    if is_recipe_type(data):
        return data
    if isinstance(data, dict):
        graph = data.get("@graph")
        if isinstance(graph, list):
            logger.debug("Found @graph with %d items", len(graph))
            for node in graph:
                found = find_recipe_object(node, max_depth, _depth + 1)
                if found is not None:
                    return found
        return None
    if isinstance(data, list):
        for item in data:
            found = find_recipe_object(item, max_depth, _depth + 1)
            if found is not None:
                return found
    return None


def extract_json_ld(html: str) -> Optional[dict]:
    """Return the first Recipe node found in the page's JSON-LD blocks.

    Blocks that fail to decode are skipped; a page without a Recipe node
    yields None.
    """
    require_type(html, "html", str, "a string")
    soup = BeautifulSoup(html, "lxml")
    scripts = soup.find_all("script", attrs={"type": _JSON_LD_TYPE_RE})
    logger.info("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json or not raw_json.strip():
            logger.debug("JSON-LD block %d is empty", idx)
            continue
        try:
            # strict=False tolerates raw newlines inside strings
            data = json.loads(raw_json, strict=False)
        except (ValueError, RecursionError) as exc:
            # ValueError covers JSONDecodeError and oversized integer literals
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )
            continue

        recipe = find_recipe_object(data)
        if recipe is not None:
            logger.info("JSON-LD block %d contains a Recipe", idx)
            return recipe
        logger.debug("JSON-LD block %d has no Recipe node", idx)

    return None


def ingredient_lines(raw: Any) -> List[str]:
    """Non-blank ingredient strings from a recipeIngredient value (text, list or objects)."""
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        logger.warning("recipeIngredient is not a list or string: %s", type(raw).__name__)
        return []
    lines: List[str] = []
    for idx, entry in enumerate(raw):
        if isinstance(entry, dict):
            entry = entry.get("text") or entry.get("name")
        if isinstance(entry, str) and entry.strip():
            lines.append(clean_text(entry))
        else:
            logger.debug("Ingredient %d skipped (%s)", idx, type(entry).__name__)
    return lines


def build_scraped_recipe(obj: dict, url: Optional[str] = None) -> ScrapedRecipe:
    """Map a schema.org Recipe node onto a ScrapedRecipe."""
    settings = get_settings()
    name = obj.get("name")
    title = clean_text(name) if isinstance(name, str) else ""
    description = obj.get("description")
    description = clean_text(description) if isinstance(description, str) else ""

    parsed_lines = parse_ingredients(ingredient_lines(obj.get("recipeIngredient") or []))
    steps = extract_instruction_text(obj.get("recipeInstructions"))

    recipe = ScrapedRecipe(
        title=title or settings.default_recipe_title,
        description=description or None,
        prep_time=parse_minutes(obj.get("prepTime")),
        cook_time=parse_minutes(obj.get("cookTime")),
        total_time=parse_minutes(obj.get("totalTime")),
        servings=parse_servings(obj.get("recipeYield")),
        ingredients=[ScrapedIngredient(amount=line.amount, name=line.name) for line in parsed_lines],
        steps=steps,
        image_url=extract_image(obj.get("image")),
        source_url=url,
        source_name=extract_source_name(url) if url else None,
    )
    logger.info(
        "Recipe extracted: title=%s, ingredients=%d, steps=%d",
        recipe.title[:50],
        len(recipe.ingredients),
        len(recipe.steps),
    )
    return recipe


def extract_recipe_from_schema_org(html: str, url: Optional[str] = None) -> Optional[ScrapedRecipe]:
    """Extract recipe from schema.org JSON-LD data embedded in HTML."""
    if url is not None:
        require_type(url, "url", str, "a string")
    obj = extract_json_ld(html)
    if obj is None:
        logger.info("No schema.org Recipe found")
        return None
    return build_scraped_recipe(obj, url)
