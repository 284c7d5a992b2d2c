#!/usr/bin/env python
"""
Extract the schema.org recipe from a saved HTML page and print it as JSON.

Run manually:
    python scripts/parse_recipe_file.py page.html --url https://example.com/recipe
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from recipe_import.app.core.config import configure_logging
from recipe_import.app.services.url_parsing import extract_json_ld, parse_ingredients
from recipe_import.app.services.url_parsing.extractors.schema_org import build_scraped_recipe, ingredient_lines

logger = logging.getLogger("parse_recipe_file")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("path", type=Path, help="HTML file to read")
    parser.add_argument("--url", help="Page URL, used for sourceUrl and sourceName")
    args = parser.parse_args()

    configure_logging()
    try:
        html = args.path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        logger.exception("Could not read %s", args.path)
        return 1

    obj = extract_json_ld(html)
    if obj is None:
        logger.error("No recipe found in %s", args.path)
        return 1

    recipe = build_scraped_recipe(obj, args.url)
    raw_lines = ingredient_lines(obj.get("recipeIngredient") or [])
    output = {
        "recipe": recipe.to_form_data(),
        "parsedIngredients": [line.model_dump(by_alias=True) for line in parse_ingredients(raw_lines)],
    }
    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
