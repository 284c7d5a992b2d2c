"""Static lexicons and conversion tables used by recipe parsing.

Every table is built once at import and exposed read-only.
"""

from types import MappingProxyType

# Spelled-out quantities. Matched as whole words only.
WORD_NUMBERS = MappingProxyType(
    {
        "one": 1,
        "two": 2,
        "three": 3,
        "four": 4,
        "five": 5,
        "six": 6,
        "seven": 7,
        "eight": 8,
        "nine": 9,
        "ten": 10,
        "eleven": 11,
        "twelve": 12,
        "a": 1,
        "an": 1,
    }
)

# Thirds are deliberately two-decimal approximations.
FRACTIONS = MappingProxyType(
    {
        # Unicode glyphs
        "½": 0.5,
        "⅓": 0.33,
        "⅔": 0.67,
        "¼": 0.25,
        "¾": 0.75,
        "⅛": 0.125,
        "⅜": 0.375,
        "⅝": 0.625,
        "⅞": 0.875,
        # Text fractions
        "1/2": 0.5,
        "1/3": 0.33,
        "2/3": 0.67,
        "1/4": 0.25,
        "3/4": 0.75,
        "1/8": 0.125,
        "3/8": 0.375,
        "5/8": 0.625,
        "7/8": 0.875,
    }
)

FRACTION_CHARS = "".join(key for key in FRACTIONS if len(key) == 1)
TEXT_FRACTIONS = tuple(key for key in FRACTIONS if "/" in key)

CANONICAL_UNITS = frozenset(
    {
        "tsp",
        "tbsp",
        "fl oz",
        "cup",
        "pint",
        "quart",
        "gallon",
        "oz",
        "lb",
        "g",
        "kg",
        "ml",
        "L",
        "inch",
        "cm",
    }
)

# Keys are case-sensitive: "T" is a tablespoon, "t" a teaspoon.
UNIT_ALIASES = MappingProxyType(
    {
        # Volume - tablespoon
        "tablespoon": "tbsp",
        "tablespoons": "tbsp",
        "tbsp": "tbsp",
        "Tbsp": "tbsp",
        "T": "tbsp",
        "tbl": "tbsp",
        "tbl.": "tbsp",
        # Volume - teaspoon
        "teaspoon": "tsp",
        "teaspoons": "tsp",
        "tsp": "tsp",
        "tsp.": "tsp",
        "t": "tsp",
        # Volume - cup
        "cup": "cup",
        "cups": "cup",
        "c": "cup",
        "C": "cup",
        # Volume - fluid ounce
        "fluid ounce": "fl oz",
        "fluid ounces": "fl oz",
        "fl oz": "fl oz",
        "fl. oz.": "fl oz",
        "fl. oz": "fl oz",
        "floz": "fl oz",
        # Volume - pint
        "pint": "pint",
        "pints": "pint",
        "pt": "pint",
        "pt.": "pint",
        # Volume - quart
        "quart": "quart",
        "quarts": "quart",
        "qt": "quart",
        "qt.": "quart",
        # Volume - gallon
        "gallon": "gallon",
        "gallons": "gallon",
        "gal": "gallon",
        "gal.": "gallon",
        # Volume - liter
        "liter": "L",
        "liters": "L",
        "litre": "L",
        "litres": "L",
        "l": "L",
        "l.": "L",
        "L": "L",
        # Volume - milliliter
        "milliliter": "ml",
        "milliliters": "ml",
        "millilitre": "ml",
        "millilitres": "ml",
        "ml": "ml",
        "mL": "ml",
        "ml.": "ml",
        # Weight - ounce
        "ounce": "oz",
        "ounces": "oz",
        "oz": "oz",
        "oz.": "oz",
        # Weight - pound
        "pound": "lb",
        "pounds": "lb",
        "lb": "lb",
        "lb.": "lb",
        "lbs": "lb",
        "lbs.": "lb",
        # Weight - gram
        "gram": "g",
        "grams": "g",
        "gr": "g",
        "g": "g",
        "g.": "g",
        # Weight - kilogram
        "kilogram": "kg",
        "kilograms": "kg",
        "kilo": "kg",
        "kilos": "kg",
        "kg": "kg",
        "kg.": "kg",
        # Length
        "inch": "inch",
        "inches": "inch",
        "in": "inch",
        "in.": "inch",
        '"': "inch",
        "centimeter": "cm",
        "centimeters": "cm",
        "centimetre": "cm",
        "centimetres": "cm",
        "cm": "cm",
    }
)

IMPERIAL_VOLUME_UNITS = frozenset({"tsp", "tbsp", "fl oz", "cup", "pint", "quart", "gallon"})
IMPERIAL_WEIGHT_UNITS = frozenset({"oz", "lb"})
IMPERIAL_LENGTH_UNITS = frozenset({"inch"})
METRIC_UNITS = frozenset({"g", "kg", "ml", "L", "cm"})

# Spoon-scale units render in ml even without a density match.
SPOON_UNITS = frozenset({"tsp", "tbsp"})

VOLUME_TO_ML = MappingProxyType(
    {
        "tsp": 5,
        "tbsp": 15,
        "fl oz": 30,
        "cup": 240,
        "pint": 473,
        "quart": 946,
        "gallon": 3785,
    }
)

WEIGHT_TO_G = MappingProxyType({"oz": 28, "lb": 454})

LENGTH_TO_CM = MappingProxyType({"inch": 2.5})

ML_PER_CUP = 240

# Grams per US cup.
INGREDIENT_DENSITY = MappingProxyType(
    {
        # Flours
        "flour": 120,
        "all-purpose flour": 120,
        "ap flour": 120,
        "plain flour": 120,
        "bread flour": 127,
        "whole wheat flour": 113,
        "whole-wheat flour": 113,
        "cake flour": 114,
        "almond flour": 96,
        "almond meal": 96,
        "coconut flour": 112,
        "rice flour": 158,
        # Sugars
        "sugar": 200,
        "granulated sugar": 200,
        "white sugar": 200,
        "caster sugar": 200,
        "brown sugar": 220,
        "light brown sugar": 220,
        "dark brown sugar": 220,
        "packed brown sugar": 220,
        "powdered sugar": 120,
        "confectioners' sugar": 120,
        "confectioners sugar": 120,
        "icing sugar": 120,
        # Fats
        "butter": 227,
        "unsalted butter": 227,
        "salted butter": 227,
        "oil": 218,
        "vegetable oil": 218,
        "olive oil": 218,
        "canola oil": 218,
        "coconut oil": 218,
        "shortening": 191,
        # Liquids
        "water": 240,
        "milk": 245,
        "whole milk": 245,
        "cream": 240,
        "heavy cream": 240,
        "whipping cream": 240,
        "buttermilk": 245,
        "yogurt": 245,
        "greek yogurt": 280,
        "sour cream": 240,
        "honey": 340,
        "maple syrup": 322,
        "molasses": 340,
        "corn syrup": 328,
        # Grains
        "rice": 185,
        "white rice": 185,
        "brown rice": 190,
        "oats": 90,
        "rolled oats": 90,
        "old-fashioned oats": 90,
        "quick oats": 80,
        "breadcrumbs": 108,
        "panko breadcrumbs": 60,
        "quinoa": 170,
        "couscous": 175,
        # Nuts and seeds
        "almonds": 143,
        "sliced almonds": 92,
        "walnuts": 120,
        "chopped walnuts": 120,
        "pecans": 109,
        "chopped pecans": 109,
        "peanuts": 146,
        "cashews": 137,
        "pine nuts": 135,
        # Dairy
        "parmesan": 100,
        "grated parmesan": 100,
        "cheddar": 113,
        "shredded cheddar": 113,
        "cream cheese": 232,
        "cottage cheese": 225,
        "ricotta cheese": 246,
        # Chocolate and cocoa
        "cocoa powder": 85,
        "unsweetened cocoa": 85,
        "chocolate chips": 170,
        # Starches and leaveners
        "cornstarch": 128,
        "corn starch": 128,
        "baking powder": 230,
        "baking soda": 220,
        "salt": 288,
        "kosher salt": 240,
        "table salt": 288,
        "yeast": 192,
        "active dry yeast": 192,
        "instant yeast": 192,
        # Misc
        "peanut butter": 258,
        "mayonnaise": 220,
        "ketchup": 240,
        "soy sauce": 255,
    }
)

# Longest keys first so "brown sugar" wins over "sugar".
DENSITY_KEYS_BY_LENGTH = tuple(sorted(INGREDIENT_DENSITY, key=lambda key: (-len(key), key)))

# Hostname parts with a fixed display spelling.
SOURCE_NAME_OVERRIDES = MappingProxyType({"nyt": "NYTimes", "nytimes": "NYTimes", "bbc": "BBC"})
