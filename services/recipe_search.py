"""Recipe search against TheMealDB.

`RecipeSearchAdapter.search` is exposed to the language model as the
`searchRecipes` tool. The upstream body is untrusted: anything that does not
match `MealDBSearchResponse` degrades to an empty result instead of an error.
"""

from typing import List

import httpx
from pydantic import ValidationError

from core.config import MEALDB_BASE_URL, MAX_SEARCH_RESULTS
from core.exceptions import UpstreamUnavailable
from core.logger import get_logger
from schemas.recipe_schema import INGREDIENT_SLOTS, MealDBMeal, MealDBSearchResponse, Recipe

logger = get_logger("services.recipe_search")

SEARCH_RECIPES_TOOL = {
    "type": "function",
    "function": {
        "name": "searchRecipes",
        "description": "Search for recipes on TheMealDB. Can be used to find meals based on a query string.",
        "parameters": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Free-text recipe search, e.g. 'Vegetarian Lasagna'.",
                },
            },
            "required": ["query"],
        },
    },
}


def format_ingredients(meal: MealDBMeal) -> List[str]:
    """Collapse the numbered ingredient/measure slots into "measure ingredient" strings.

    Blank or missing ingredient slots are skipped; slot order is kept.
    """
    ingredients = []
    for i in range(1, INGREDIENT_SLOTS + 1):
        ingredient = getattr(meal, f"strIngredient{i}")
        if not ingredient or not ingredient.strip():
            continue
        measure = (getattr(meal, f"strMeasure{i}") or "").strip()
        ingredients.append(f"{measure} {ingredient.strip()}".strip())
    return ingredients


def to_recipe(meal: MealDBMeal) -> Recipe:
    return Recipe(
        name=meal.strMeal,
        ingredients=format_ingredients(meal),
        instructions=meal.strInstructions,
        image_url=meal.strMealThumb or None,
        source_url=meal.strSource or None,
    )


class RecipeSearchAdapter:
    """Stateless TheMealDB client; safe to share across requests and threads."""

    def __init__(
        self,
        http_client: httpx.Client,
        base_url: str = MEALDB_BASE_URL,
        max_results: int = MAX_SEARCH_RESULTS,
    ):
        self.http_client = http_client
        self.base_url = base_url.rstrip("/") + "/"
        self.max_results = max_results

    def search(self, query: str) -> List[Recipe]:
        """Return up to `max_results` recipes matching `query`, in upstream order.

        Raises:
            UpstreamUnavailable: If TheMealDB cannot be reached or answers with
                a non-success status.
        """
        logger.info("Searching for recipes with query: %s", query)
        try:
            resp = self.http_client.get(f"{self.base_url}search.php", params={"s": query})
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable("themealdb", reason=str(exc)) from exc

        if not resp.is_success:
            raise UpstreamUnavailable("themealdb", status=resp.status_code, reason=resp.reason_phrase)

        try:
            data = MealDBSearchResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            logger.warning("Search response failed validation for query %r: %s", query, exc)
            return []

        if not data.meals:
            logger.info("No meals found for query: %s", query)
            return []

        return [to_recipe(meal) for meal in data.meals[:self.max_results]]
