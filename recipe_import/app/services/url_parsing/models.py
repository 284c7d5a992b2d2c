"""Pydantic models for recipe extraction and ingredient parsing."""

import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConversionConfidence(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UnitCategory(str, enum.Enum):
    IMPERIAL_VOLUME = "imperial_volume"
    IMPERIAL_WEIGHT = "imperial_weight"
    IMPERIAL_LENGTH = "imperial_length"
    METRIC = "metric"
    UNRECOGNIZED = "unrecognized"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class MetricAmount(_FrozenModel):
    """Rendered amount after metric conversion."""

    amount: str
    confidence: ConversionConfidence


class ParsedIngredientLine(_FrozenModel):
    """One raw ingredient line split into amount and name.

    When ``converted`` is true ``amount`` is metric text; otherwise it is
    empty or the source quantity left in its own unit.
    """

    original: str
    amount: str = ""
    name: str
    converted: bool = False
    confidence: ConversionConfidence = ConversionConfidence.HIGH


class ScrapedIngredient(_FrozenModel):
    amount: str = ""
    name: str


class ScrapedRecipe(_FrozenModel):
    """A recipe pulled out of a page, shaped for pre-filling a submission form."""

    title: str
    description: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    # kept for callers; not part of the form payload
    total_time: Optional[int] = Field(None, exclude=True)
    servings: Optional[int] = None
    ingredients: List[ScrapedIngredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    source_url: Optional[str] = None
    source_name: Optional[str] = None

    def to_form_data(self) -> dict:
        """camelCase dict with unset optional fields left out."""
        return self.model_dump(by_alias=True, exclude_none=True)
