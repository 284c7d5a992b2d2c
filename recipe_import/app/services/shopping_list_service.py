"""Shopping list merging across recipes.

Ingredient lines here are parsed with a display-oriented grammar and unit
lexicon that is kept apart from the metric-conversion lexicon in
``url_parsing``; the two group units at different granularity.
"""

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Tuple, Union

from recipe_import.app.core.errors import InputContractError, require_type
from recipe_import.app.schemas.shopping_list import (
    MergedIngredient,
    ShoppingIngredient,
    ShoppingListItem,
)
from recipe_import.app.services.quantity_parser import parse_quantity_display

logger = logging.getLogger(__name__)

MERGE_UNIT_ALIASES = MappingProxyType(
    {
        "tablespoon": "tbsp",
        "tablespoons": "tbsp",
        "tbs": "tbsp",
        "tb": "tbsp",
        "teaspoon": "tsp",
        "teaspoons": "tsp",
        "cups": "cup",
        "ounce": "oz",
        "ounces": "oz",
        "pound": "lb",
        "pounds": "lb",
        "lbs": "lb",
        "gram": "g",
        "grams": "g",
        "kilogram": "kg",
        "kilograms": "kg",
        "milliliter": "ml",
        "milliliters": "ml",
        "millilitre": "ml",
        "millilitres": "ml",
        "liter": "l",
        "liters": "l",
        "litre": "l",
        "litres": "l",
        "pinches": "pinch",
        "cloves": "clove",
        "pieces": "piece",
        "bunches": "bunch",
        "cans": "can",
        "slices": "slice",
        "sprigs": "sprig",
        "heads": "head",
        "large": "large",
        "medium": "medium",
        "small": "small",
    }
)

# Units that may follow a number with no space, e.g. "400g pasta".
ATTACHED_UNITS = ("g", "kg", "ml", "l", "oz", "lb", "mg", "cl", "dl")

MERGE_KNOWN_UNITS = frozenset(
    {
        "tbsp",
        "tsp",
        "cup",
        "oz",
        "lb",
        "pinch",
        "clove",
        "piece",
        "bunch",
        "can",
        "slice",
        "sprig",
        "head",
        "large",
        "medium",
        "small",
    }
)

IRREGULAR_PLURALS = MappingProxyType(
    {
        "tomatoes": "tomato",
        "potatoes": "potato",
        "leaves": "leaf",
        "halves": "half",
        "loaves": "loaf",
        "cloves": "clove",
        "olives": "olive",
    }
)

_DESCRIPTOR_RE = re.compile(
    r"\b(fresh|dried|chopped|minced|diced|sliced|grated|crushed|whole|ground|large|medium|small)\b"
)
_ATTACHED_RE = re.compile(
    rf"^(\d+(?:\.\d+)?)({'|'.join(ATTACHED_UNITS)})\s+(.+)$",
    re.IGNORECASE | re.ASCII | re.DOTALL,
)
_AMOUNT_UNIT_RE = re.compile(
    r"^(\d+(?:\s+\d+/\d+|\.\d+|/\d+)?)\s*([a-zA-Z]+)?\s*(.*)$",
    re.ASCII | re.DOTALL,
)

DISPLAY_FRACTIONS = (
    (1 / 4, "1/4"),
    (1 / 3, "1/3"),
    (1 / 2, "1/2"),
    (2 / 3, "2/3"),
    (3 / 4, "3/4"),
)
FRACTION_TOLERANCE = 0.01


def normalize_merge_unit(unit: str) -> str:
    """Lowercase a unit and fold it onto its shopping-list spelling."""
    require_type(unit, "unit", str, "a string")
    lower = unit.lower().strip()
    return MERGE_UNIT_ALIASES.get(lower, lower)


def _to_amount(text: str) -> Optional[float]:
    quantity = parse_quantity_display(text)
    if quantity is None:
        return None
    amount = float(quantity)
    # hundreds of digits overflow to inf
    return amount if math.isfinite(amount) else None


def _is_merge_unit(token: str) -> bool:
    return token in MERGE_UNIT_ALIASES or token in ATTACHED_UNITS or token in MERGE_KNOWN_UNITS


def parse_shopping_ingredient(raw: str) -> ShoppingIngredient:
    """Split a line such as "400g spaghetti" or "2 tbsp olive oil" for grouping.

    Lines without a leading amount keep the whole text as the name.
    """
    require_type(raw, "raw", str, "a string")
    text = raw.strip()

    match = _ATTACHED_RE.match(text)
    if match:
        amount_text, unit, name = match.groups()
        return ShoppingIngredient(
            amount=_to_amount(amount_text),
            unit=normalize_merge_unit(unit),
            name=name.strip(),
            raw=text,
        )

    match = _AMOUNT_UNIT_RE.match(text)
    if match:
        amount_text, unit_or_name, rest = match.groups()
        amount = _to_amount(amount_text)
        if amount is not None:
            potential_unit = (unit_or_name or "").lower()
            if rest and _is_merge_unit(potential_unit):
                return ShoppingIngredient(
                    amount=amount,
                    unit=normalize_merge_unit(potential_unit),
                    name=rest.strip(),
                    raw=text,
                )
            name = (unit_or_name or "") + (f" {rest}" if rest else "")
            return ShoppingIngredient(amount=amount, unit="", name=name.strip(), raw=text)

    return ShoppingIngredient(amount=None, unit="", name=text, raw=text)


def singularize(word: str) -> str:
    """Reduce a common ingredient plural to its singular, lowercased."""
    lower = word.lower()
    if lower in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[lower]
    if lower.endswith("ies") and len(lower) > 4:
        return lower[:-3] + "y"
    if lower.endswith("ves") and len(lower) > 4:
        # chives -> chive; true -f plurals live in IRREGULAR_PLURALS
        return lower[:-1]
    if lower.endswith("es") and len(lower) > 3:
        stem = lower[:-2]
        if stem.endswith(("sh", "ch", "x", "z", "s")):
            return stem
    if lower.endswith("s") and len(lower) > 2 and not lower.endswith("ss"):
        return lower[:-1]
    return lower


def normalize_ingredient_name(name: str) -> str:
    """Normalize an ingredient name for grouping.

    Drops parentheticals, anything after a comma and preparation adjectives,
    then singularizes each word: "Fresh Tomatoes (ripe), diced" -> "tomato".
    """
    require_type(name, "name", str, "a string")
    normalized = name.lower().strip()
    normalized = re.sub(r"\([^)]*\)", "", normalized)
    normalized = re.sub(r",.*$", "", normalized, flags=re.DOTALL)
    normalized = _DESCRIPTOR_RE.sub("", normalized)
    normalized = re.sub(r"\s+", " ", normalized).strip()
    return " ".join(singularize(word) for word in normalized.split(" "))


@dataclass
class _MergeGroup:
    name: str
    unit: str
    amounts: List[Optional[float]] = field(default_factory=list)
    recipe_slugs: List[str] = field(default_factory=list)

    def add(self, amount: Optional[float], recipe_slug: str) -> None:
        self.amounts.append(amount)
        if recipe_slug not in self.recipe_slugs:
            self.recipe_slugs.append(recipe_slug)

    def total(self) -> Optional[float]:
        known = [amount for amount in self.amounts if amount is not None]
        if not known:
            return None
        if len(known) == len(self.amounts):
            total = sum(known)
            return total if math.isfinite(total) else None
        return known[0]

    def to_merged(self) -> MergedIngredient:
        return MergedIngredient(
            amount=self.total(),
            unit=self.unit,
            name=self.name,
            source_recipes=list(self.recipe_slugs),
        )


ItemLike = Union[ShoppingListItem, Mapping]


def _coerce_item(item: ItemLike, idx: int) -> ShoppingListItem:
    if isinstance(item, ShoppingListItem):
        return item
    if isinstance(item, Mapping):
        return ShoppingListItem.model_validate(dict(item))
    raise InputContractError(f"items[{idx}]", "a ShoppingListItem or mapping", item)


def merge_ingredients(items: Iterable[ItemLike]) -> List[MergedIngredient]:
    """Merge ingredient lines from several recipes into one shopping list.

    Lines are grouped by normalized name and unit. Amounts are summed when
    every line in a group has one; otherwise the first known amount is kept.
    The result is sorted by display name.
    """
    groups: Dict[Tuple[str, str], _MergeGroup] = {}
    for idx, raw_item in enumerate(items):
        item = _coerce_item(raw_item, idx)
        line = item.raw or f"{item.amount} {item.unit} {item.ingredient}"
        parsed = parse_shopping_ingredient(line)
        display_name = parsed.name or item.ingredient
        key = (normalize_ingredient_name(display_name), normalize_merge_unit(parsed.unit or item.unit))

        group = groups.get(key)
        if group is None:
            group = groups[key] = _MergeGroup(name=display_name, unit=key[1])
        group.add(parsed.amount, item.recipe_slug)
        logger.debug("Line %r grouped under %s", line, key)

    merged = [group.to_merged() for group in groups.values()]
    merged.sort(key=lambda ingredient: (ingredient.name.casefold(), ingredient.name))
    logger.info("Merged %d groups", len(merged))
    return merged


def format_amount(amount: Optional[float]) -> str:
    """Render an amount for display, snapping to common fractions ("1 1/2")."""
    if amount is None or not math.isfinite(amount):
        return ""
    whole = math.floor(amount)
    remainder = amount - whole

    fraction_label = ""
    for value, label in DISPLAY_FRACTIONS:
        if abs(remainder - value) < FRACTION_TOLERANCE:
            fraction_label = label
            break

    if fraction_label:
        return fraction_label if whole == 0 else f"{whole} {fraction_label}"
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}".rstrip("0").rstrip(".")


def format_merged_ingredient(ingredient: MergedIngredient) -> str:
    """Render a merged ingredient, e.g. "3 tbsp olive oil" or "5 lemons"."""
    parts = []
    amount_text = format_amount(ingredient.amount)
    if amount_text:
        parts.append(amount_text)
    if ingredient.unit:
        parts.append(ingredient.unit)
    parts.append(ingredient.name)
    return " ".join(parts)


class ShoppingList:
    """In-memory shopping list holding ingredient lines from several recipes.

    Adding a recipe again replaces its earlier lines. ``merged()`` is
    recomputed from the current lines on every call.
    """

    def __init__(self, items: Optional[Iterable[ItemLike]] = None):
        self._items: List[ShoppingListItem] = [
            _coerce_item(item, idx) for idx, item in enumerate(items or [])
        ]

    @property
    def items(self) -> Tuple[ShoppingListItem, ...]:
        return tuple(self._items)

    def add_recipe(self, recipe_slug: str, ingredients: Iterable[Union[str, Mapping]]) -> None:
        """Add a recipe's lines; strings are raw lines, mappings carry item fields."""
        require_type(recipe_slug, "recipe_slug", str, "a string")
        new_items = []
        for idx, ingredient in enumerate(ingredients):
            if isinstance(ingredient, str):
                new_items.append(ShoppingListItem(recipe_slug=recipe_slug, raw=ingredient))
            elif isinstance(ingredient, Mapping):
                new_items.append(ShoppingListItem.model_validate({**ingredient, "recipe_slug": recipe_slug}))
            else:
                raise InputContractError(f"ingredients[{idx}]", "a string or mapping", ingredient)
        self._items = [item for item in self._items if item.recipe_slug != recipe_slug] + new_items
        logger.debug("Recipe %s now has %d lines on the list", recipe_slug, len(new_items))

    def remove_recipe(self, recipe_slug: str) -> None:
        self._items = [item for item in self._items if item.recipe_slug != recipe_slug]

    def clear(self) -> None:
        self._items = []

    def contains_recipe(self, recipe_slug: str) -> bool:
        return any(item.recipe_slug == recipe_slug for item in self._items)

    def recipe_slugs(self) -> List[str]:
        """Unique recipe slugs in the order they were added."""
        return list(dict.fromkeys(item.recipe_slug for item in self._items))

    @property
    def recipe_count(self) -> int:
        return len(self.recipe_slugs())

    @property
    def item_count(self) -> int:
        return len(self._items)

    def merged(self) -> List[MergedIngredient]:
        return merge_ingredients(self._items)
