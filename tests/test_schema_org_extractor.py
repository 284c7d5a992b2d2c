import pytest

from recipe_import.app.core.errors import InputContractError
from recipe_import.app.services.url_parsing.extractors.schema_org import (
    extract_json_ld,
    extract_recipe_from_schema_org,
    find_recipe_object,
    ingredient_lines,
)


def test_extract_recipe_from_schema_org():
    html = """
    <html>
      <head>
        <script type="application/ld+json">
        {
          "@context": "https://schema.org",
          "@type": "Recipe",
          "name": "Test Recipe",
          "recipeIngredient": ["1 cup flour", "2 eggs"],
          "recipeInstructions": ["Mix", "Bake"],
          "prepTime": "PT15M",
          "cookTime": "PT1H30M",
          "recipeYield": "4 servings",
          "image": "https://example.com/cake.jpg"
        }
        </script>
      </head>
    </html>
    """

    parsed = extract_recipe_from_schema_org(html, "https://www.example.com/test")
    assert parsed is not None
    assert parsed.title == "Test Recipe"
    assert parsed.prep_time == 15
    assert parsed.cook_time == 90
    assert parsed.servings == 4
    assert [(i.amount, i.name) for i in parsed.ingredients] == [("120g", "flour"), ("2", "eggs")]
    assert parsed.steps == ["Mix", "Bake"]
    assert parsed.image_url == "https://example.com/cake.jpg"
    assert parsed.source_url == "https://www.example.com/test"
    assert parsed.source_name == "Example"


def test_malformed_block_does_not_stop_scanning(page):
    html = page(
        '{"@type": "Recipe", "name": "Broken",',
        {"@type": "Recipe", "name": "Valid Soup", "recipeIngredient": ["1 L stock"]},
    )
    parsed = extract_recipe_from_schema_org(html)
    assert parsed is not None
    assert parsed.title == "Valid Soup"
    assert parsed.ingredients[0].amount == "1L"


def test_article_only_page_is_not_found(page):
    html = page({"@context": "https://schema.org", "@type": "Article", "headline": "News"})
    assert extract_json_ld(html) is None
    assert extract_recipe_from_schema_org(html) is None


def test_page_without_json_ld_is_not_found():
    assert extract_recipe_from_schema_org("<html><body><p>hello</p></body></html>") is None
    assert extract_recipe_from_schema_org("") is None


def test_recipe_inside_graph(page):
    html = page(
        {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "WebPage", "name": "Page"},
                {"@type": ["Recipe", "NewsArticle"], "name": "Graph Pie"},
                {"@type": "Recipe", "name": "Second Pie"},
            ],
        }
    )
    assert extract_json_ld(html)["name"] == "Graph Pie"


def test_recipe_inside_top_level_array(page):
    html = page([{"@type": "Organization"}, {"@type": "http://schema.org/Recipe", "name": "Array Stew"}])
    assert extract_recipe_from_schema_org(html).title == "Array Stew"


def test_first_recipe_across_blocks_wins(page):
    html = page({"@type": "Recipe", "name": "First"}, {"@type": "Recipe", "name": "Second"})
    assert extract_recipe_from_schema_org(html).title == "First"


def test_script_type_matching_is_lenient():
    html = (
        '<script type="Application/LD+JSON; charset=utf-8">'
        '{"@type": "Recipe", "name": "Typed"}</script>'
    )
    assert extract_json_ld(html)["name"] == "Typed"


def test_missing_title_uses_default(page):
    parsed = extract_recipe_from_schema_org(page({"@type": "Recipe", "name": "   "}))
    assert parsed.title == "Untitled Recipe"
    assert parsed.ingredients == []
    assert parsed.steps == []


def test_default_title_is_configurable(page, monkeypatch):
    monkeypatch.setenv("RECIPE_DEFAULT_TITLE", "Imported Recipe")
    parsed = extract_recipe_from_schema_org(page({"@type": "Recipe"}))
    assert parsed.title == "Imported Recipe"


def test_instruction_sections_and_steps(page):
    html = page(
        {
            "@type": "Recipe",
            "name": "Sectioned",
            "recipeInstructions": [
                {
                    "@type": "HowToSection",
                    "name": "Dough",
                    "itemListElement": [
                        {"@type": "HowToStep", "text": "Mix flour and water."},
                        {"@type": "HowToStep", "name": "Knead for ten minutes."},
                    ],
                },
                {"@type": "HowToStep", "text": "  "},
                "Bake until golden.",
            ],
        }
    )
    parsed = extract_recipe_from_schema_org(html)
    assert parsed.steps == ["Mix flour and water.", "Knead for ten minutes.", "Bake until golden."]


def test_instruction_string_split_on_newlines(page):
    html = page({"@type": "Recipe", "name": "Lines", "recipeInstructions": "Chop.\n\nFry.\n"})
    assert extract_recipe_from_schema_org(html).steps == ["Chop.", "Fry."]


@pytest.mark.parametrize(
    "image, expected",
    [
        (["https://example.com/a.jpg", "https://example.com/b.jpg"], "https://example.com/a.jpg"),
        ([{"@type": "ImageObject", "url": "https://example.com/c.jpg"}], "https://example.com/c.jpg"),
        ({"@type": "ImageObject", "url": "https://example.com/d.jpg"}, "https://example.com/d.jpg"),
        ({"@type": "ImageObject"}, None),
    ],
)
def test_image_formats(page, image, expected):
    parsed = extract_recipe_from_schema_org(page({"@type": "Recipe", "name": "Img", "image": image}))
    assert parsed.image_url == expected


def test_form_data_uses_camel_case(page):
    html = page(
        {
            "@type": "Recipe",
            "name": "Camel",
            "prepTime": "PT5M",
            "recipeYield": ["2", "2 bowls"],
            "recipeIngredient": ["Salt to taste"],
        }
    )
    data = extract_recipe_from_schema_org(html).to_form_data()
    assert data == {
        "title": "Camel",
        "prepTime": 5,
        "servings": 2,
        "ingredients": [{"amount": "", "name": "Salt to taste"}],
        "steps": [],
    }


def test_json_ld_nesting_is_bounded():
    nested = {"@type": "Recipe", "name": "Deep"}
    for _ in range(5):
        nested = [nested]
    assert find_recipe_object(nested, max_depth=10)["name"] == "Deep"
    assert find_recipe_object(nested, max_depth=3) is None


def test_non_string_html_is_a_contract_error():
    with pytest.raises(InputContractError):
        extract_json_ld(None)
    with pytest.raises(TypeError):
        extract_recipe_from_schema_org(b"<html></html>")


def test_extraction_is_deterministic(page):
    html = page({"@type": "Recipe", "name": "Same", "recipeIngredient": ["2 cups sugar", "1 lb beef"]})
    assert extract_recipe_from_schema_org(html) == extract_recipe_from_schema_org(html)


def test_deeply_nested_block_does_not_stop_scanning(page):
    html = page("[" * 100000 + "]" * 100000, {"@type": "Recipe", "name": "After Deep Block"})
    assert extract_recipe_from_schema_org(html).title == "After Deep Block"


def test_oversized_integer_literal_does_not_raise(page):
    html = page(
        '{"@type": "Recipe", "name": "Huge", "recipeYield": ' + "9" * 5000 + "}",
        {"@type": "Recipe", "name": "Fallback"},
    )
    assert extract_recipe_from_schema_org(html) is not None


def test_non_finite_numbers_degrade_to_missing(page):
    html = page('{"@type": "Recipe", "name": "Odd", "recipeYield": NaN, "cookTime": Infinity, "prepTime": 1e999}')
    parsed = extract_recipe_from_schema_org(html)
    assert parsed.title == "Odd"
    assert parsed.servings is None
    assert parsed.cook_time is None
    assert parsed.prep_time is None


def test_total_time_is_not_in_form_data(page):
    parsed = extract_recipe_from_schema_org(page({"@type": "Recipe", "name": "Timed", "totalTime": "PT1H"}))
    assert parsed.total_time == 60
    assert "totalTime" not in parsed.to_form_data()


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2 eggs", ["2 eggs"]),
        (["1 cup  flour", "", "salt"], ["1 cup flour", "salt"]),
        ([{"text": "1 cup milk"}, {"name": "pepper"}, 3, {"@type": "HowToStep"}], ["1 cup milk", "pepper"]),
        (42, []),
    ],
)
def test_ingredient_lines(raw, expected):
    assert ingredient_lines(raw) == expected


def test_string_ingredient_is_one_line(page):
    parsed = extract_recipe_from_schema_org(page({"@type": "Recipe", "name": "One", "recipeIngredient": "2 eggs"}))
    assert [(i.amount, i.name) for i in parsed.ingredients] == [("2", "eggs")]
