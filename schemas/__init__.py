"""Pydantic schema package for request, response and upstream models."""

from .recipe_schema import Recipe, MealDBMeal, MealDBSearchResponse
from .meal_plan_schema import (
    MealPlanRequest,
    GenerateMealPlanRequest,
    Meal,
    MealPlanOutput,
    MealPlanResponse,
    MealPlanRecordResponse,
    SavedRecipeResponse,
)
from .user_schema import UserPreferences

__all__ = [
    "Recipe",
    "MealDBMeal",
    "MealDBSearchResponse",
    "MealPlanRequest",
    "GenerateMealPlanRequest",
    "Meal",
    "MealPlanOutput",
    "MealPlanResponse",
    "MealPlanRecordResponse",
    "SavedRecipeResponse",
    "UserPreferences",
]
