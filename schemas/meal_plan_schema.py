"""Schemas for meal plan generation requests, results and stored history."""

from datetime import datetime
from pydantic import ConfigDict, Field
from typing import Any, Dict, List, Optional

from .base_schema import CamelModel
from .recipe_schema import Recipe

MIN_MEALS = 1
MAX_MEALS = 10


class MealPlanRequest(CamelModel):
    """What the caller asked for. Immutable once submitted."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    dietary_restrictions: str = Field(
        ...,
        min_length=1,
        examples=["Vegetarian, no nuts"],
        description="Please specify at least one dietary preference or restriction."
    )
    cuisine_preferences: str = Field(
        ...,
        min_length=1,
        examples=["Italian"],
        description="Please specify at least one cuisine preference."
    )
    number_of_meals: int = Field(..., ge=MIN_MEALS, le=MAX_MEALS, examples=[3], description="Number of meals (1-10)")


class GenerateMealPlanRequest(MealPlanRequest):
    """Inbound body of the generation endpoint."""

    credential_token: str = Field(..., description="Firebase ID token of the signed-in user")

    def to_plan_request(self) -> MealPlanRequest:
        """Drop the credential so it never travels further than authentication."""
        return MealPlanRequest(**self.model_dump(exclude={"credential_token"}))


class Meal(Recipe):
    """A recipe enriched with estimated nutrition."""

    calories: Optional[float] = Field(None, examples=[650])
    macros: Optional[str] = Field(None, examples=["Protein: 25g, Carbs: 70g, Fat: 28g"])


class MealPlanOutput(CamelModel):
    """Structured final answer expected from the model."""

    meal_plan: List[Meal]


class MealPlanResponse(CamelModel):
    """Outbound success body of the generation endpoint."""

    meal_plan: List[Meal]
    plan_id: Optional[str] = Field(None, description="Id of the stored plan; null when saving failed")


class MealPlanRecordResponse(CamelModel):
    """A stored plan from the user's history."""

    id: str
    user_id: str
    created_at: datetime
    meals: List[Meal]
    request: MealPlanRequest
    preferences_snapshot: Dict[str, Any] = {}


class SavedRecipeResponse(CamelModel):
    """A single stored meal from a past plan."""

    id: str
    meal: Meal
    original_plan_id: str
    user_id: str
    saved_at: datetime
    user_notes: str = ""
