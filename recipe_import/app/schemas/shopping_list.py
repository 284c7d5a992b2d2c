from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ShoppingModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ShoppingListItem(_ShoppingModel):
    """One ingredient line added to the list, tagged with its recipe."""

    recipe_slug: str
    raw: str = ""
    ingredient: str = ""
    amount: str = ""
    unit: str = ""


class ShoppingIngredient(_ShoppingModel):
    amount: Optional[float] = None
    unit: str = ""
    name: str
    raw: str


class MergedIngredient(_ShoppingModel):
    amount: Optional[float] = None
    unit: str = ""
    name: str
    source_recipes: List[str] = Field(default_factory=list)
