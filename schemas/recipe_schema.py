"""Schemas for recipe search results and the TheMealDB wire format."""

from pydantic import BaseModel, ConfigDict, Field, create_model
from typing import List, Optional

from .base_schema import CamelModel

INGREDIENT_SLOTS = 20


class Recipe(CamelModel):
    """A recipe as returned by the search tool, before nutritional enrichment."""

    name: str = Field(..., examples=["Vegetarian Lasagna"])
    ingredients: List[str] = Field(default_factory=list, examples=[["1 tbsp Olive Oil", "2 Onions"]])
    instructions: str = ""
    image_url: Optional[str] = None
    source_url: Optional[str] = None


class _MealDBMealBase(BaseModel):
    """Fixed part of a TheMealDB meal record. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    idMeal: str
    strMeal: str
    strInstructions: str
    strMealThumb: Optional[str] = None
    strSource: Optional[str] = None


# strIngredient1..20 / strMeasure1..20, each a nullable string.
_slot_fields = {}
for _i in range(1, INGREDIENT_SLOTS + 1):
    _slot_fields[f"strIngredient{_i}"] = (Optional[str], None)
    _slot_fields[f"strMeasure{_i}"] = (Optional[str], None)

MealDBMeal = create_model("MealDBMeal", __base__=_MealDBMealBase, **_slot_fields)


class MealDBSearchResponse(BaseModel):
    """Body of `search.php`; `meals` is null when nothing matched."""

    meals: Optional[List[MealDBMeal]] = None
