import pytest

from recipe_import.app.core.errors import InputContractError
from recipe_import.app.schemas.shopping_list import MergedIngredient, ShoppingListItem
from recipe_import.app.services.shopping_list_service import (
    ShoppingList,
    format_amount,
    format_merged_ingredient,
    merge_ingredients,
    normalize_ingredient_name,
    normalize_merge_unit,
    parse_shopping_ingredient,
    singularize,
)


def _items(recipe_slug, *lines):
    return [ShoppingListItem(recipe_slug=recipe_slug, raw=line) for line in lines]


def test_same_ingredient_from_two_recipes_is_summed():
    merged = merge_ingredients(_items("A", "1 cup flour") + _items("B", "1 cup flour"))
    assert len(merged) == 1
    assert merged[0].name == "flour"
    assert merged[0].unit == "cup"
    assert merged[0].amount == 2
    assert merged[0].source_recipes == ["A", "B"]


def test_plural_and_preparation_variants_group_together():
    merged = merge_ingredients(_items("A", "2 Tomatoes") + _items("B", "3 tomatoes, diced"))
    assert len(merged) == 1
    assert merged[0].name == "Tomatoes"
    assert merged[0].amount == 5


def test_unknown_amount_keeps_first_known():
    merged = merge_ingredients(_items("A", "2 lemons") + _items("B", "lemons"))
    assert len(merged) == 1
    assert merged[0].amount == 2
    assert merged[0].source_recipes == ["A", "B"]


def test_group_without_any_amount():
    merged = merge_ingredients(_items("A", "Salt to taste") + _items("B", "salt to taste"))
    assert merged[0].amount is None
    assert merged[0].name == "Salt to taste"


def test_different_units_stay_separate():
    merged = merge_ingredients(_items("A", "1 litre milk", "500ml milk", "2 cups milk"))
    assert sorted(m.unit for m in merged) == ["cup", "l", "ml"]


def test_attached_metric_units_are_summed():
    merged = merge_ingredients(_items("A", "400g spaghetti") + _items("B", "200g Spaghetti"))
    assert [(m.amount, m.unit, m.name) for m in merged] == [(600, "g", "spaghetti")]


def test_recipe_listed_once_per_group():
    merged = merge_ingredients(_items("A", "1 tbsp olive oil", "2 tbsp olive oil"))
    assert merged[0].amount == 3
    assert merged[0].source_recipes == ["A"]


def test_output_is_sorted_by_name():
    merged = merge_ingredients(_items("A", "2 Zucchini", "3 apples", "1 Banana"))
    assert [m.name for m in merged] == ["apples", "Banana", "Zucchini"]


def test_mapping_items_are_accepted():
    merged = merge_ingredients(
        [
            {"recipeSlug": "soup", "amount": "2", "unit": "cups", "ingredient": "milk"},
            {"recipe_slug": "cake", "raw": "1 cup milk"},
        ]
    )
    assert [(m.amount, m.unit, m.source_recipes) for m in merged] == [(3, "cup", ["soup", "cake"])]


def test_invalid_item_is_a_contract_error():
    with pytest.raises(InputContractError):
        merge_ingredients([3])


@pytest.mark.parametrize(
    "raw, amount, unit, name",
    [
        ("400g spaghetti", 400, "g", "spaghetti"),
        ("2 tbsp olive oil", 2, "tbsp", "olive oil"),
        ("1 1/2 cups sugar", 1.5, "cup", "sugar"),
        ("1/2 tsp salt", 0.5, "tsp", "salt"),
        ("3 cloves garlic", 3, "clove", "garlic"),
        ("2 eggs", 2, "", "eggs"),
        ("Salt to taste", None, "", "Salt to taste"),
    ],
)
def test_parse_shopping_ingredient(raw, amount, unit, name):
    parsed = parse_shopping_ingredient(raw)
    assert parsed.amount == amount
    assert parsed.unit == unit
    assert parsed.name == name
    assert parsed.raw == raw


@pytest.mark.parametrize(
    "unit, expected",
    [("Tablespoons", "tbsp"), ("LITRES", "l"), (" grams ", "g"), ("cup", "cup"), ("handful", "handful")],
)
def test_normalize_merge_unit(unit, expected):
    assert normalize_merge_unit(unit) == expected


@pytest.mark.parametrize(
    "word, expected",
    [
        ("eggs", "egg"),
        ("Tomatoes", "tomato"),
        ("leaves", "leaf"),
        ("cherries", "cherry"),
        ("dishes", "dish"),
        ("boxes", "box"),
        ("chives", "chive"),
        ("glass", "glass"),
        ("rice", "rice"),
    ],
)
def test_singularize(word, expected):
    assert singularize(word) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Fresh Tomatoes (ripe), diced", "tomato"),
        ("Large Eggs", "egg"),
        ("red onions", "red onion"),
        ("  chopped   fresh  parsley ", "parsley"),
    ],
)
def test_normalize_ingredient_name(name, expected):
    assert normalize_ingredient_name(name) == expected


@pytest.mark.parametrize(
    "amount, expected",
    [
        (None, ""),
        (2.0, "2"),
        (0.25, "1/4"),
        (1.5, "1 1/2"),
        (0.333, "1/3"),
        (2.67, "2 2/3"),
        (1.2, "1.2"),
        (0.1, "0.1"),
    ],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_format_merged_ingredient():
    assert format_merged_ingredient(MergedIngredient(amount=3, unit="tbsp", name="olive oil")) == "3 tbsp olive oil"
    assert format_merged_ingredient(MergedIngredient(amount=5, name="lemons")) == "5 lemons"
    assert format_merged_ingredient(MergedIngredient(name="Salt to taste")) == "Salt to taste"


def test_merged_ingredient_serializes_camel_case():
    merged = MergedIngredient(amount=1, unit="cup", name="flour", source_recipes=["a"])
    assert merged.model_dump(by_alias=True) == {
        "amount": 1.0,
        "unit": "cup",
        "name": "flour",
        "sourceRecipes": ["a"],
    }


def test_shopping_list_lifecycle():
    shopping = ShoppingList()
    shopping.add_recipe("pancakes", ["1 cup flour", "2 eggs"])
    shopping.add_recipe("bread", ["1 cup flour", {"amount": "1", "unit": "tsp", "ingredient": "salt"}])

    assert shopping.recipe_slugs() == ["pancakes", "bread"]
    assert shopping.recipe_count == 2
    assert shopping.item_count == 4
    assert [(m.name, m.amount) for m in shopping.merged()] == [("eggs", 2), ("flour", 2), ("salt", 1)]

    shopping.add_recipe("pancakes", ["3 eggs"])
    assert shopping.item_count == 3
    merged = {m.name: m for m in shopping.merged()}
    assert merged["eggs"].amount == 3
    assert merged["flour"].source_recipes == ["bread"]

    shopping.remove_recipe("bread")
    assert not shopping.contains_recipe("bread")
    assert shopping.contains_recipe("pancakes")

    shopping.clear()
    assert shopping.items == ()
    assert shopping.merged() == []


def test_shopping_list_rejects_bad_lines():
    shopping = ShoppingList()
    with pytest.raises(InputContractError):
        shopping.add_recipe("a", [42])
    with pytest.raises(InputContractError):
        shopping.add_recipe(None, ["1 cup flour"])


def test_oversized_amount_is_treated_as_unknown():
    raw = "9" * 400 + " cups flour"
    merged = merge_ingredients([{"recipe_slug": "a", "raw": raw}])
    assert merged[0].amount is None
    assert format_merged_ingredient(merged[0]) == raw


def test_overflowing_sum_is_treated_as_unknown():
    big = "1" + "0" * 308
    merged = merge_ingredients(_items("A", f"{big} cups sugar") + _items("B", f"{big} cups sugar"))
    assert merged[0].amount is None


@pytest.mark.parametrize("amount", [float("inf"), float("nan")])
def test_format_amount_non_finite(amount):
    assert format_amount(amount) == ""
