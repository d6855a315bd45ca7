"""Tool-augmented meal plan generation.

The model is handed the user's preferences and the `searchRecipes` tool. Each
round it either asks for one or more searches, which are answered with tool
messages, or returns the final JSON plan. The loop is capped at
`max_tool_rounds` model calls. The final plan must contain exactly the
requested number of meals with pairwise distinct names; anything else is a
`GenerationFailed` and is not retried here.
"""

import concurrent.futures
import json
from typing import Any, Dict, List, Optional

import openai
from pydantic import ValidationError

from core.config import MAX_TOOL_ROUNDS, OPENAI_MODEL
from core.exceptions import GenerationFailed, UpstreamUnavailable
from core.logger import get_logger
from schemas.meal_plan_schema import Meal, MealPlanOutput, MealPlanRequest
from services.prompts import SYSTEM_PROMPT, MealPlanPrompt
from services.recipe_search import SEARCH_RECIPES_TOOL, RecipeSearchAdapter

logger = get_logger("services.meal_plan_generator")

MAX_PARALLEL_SEARCHES = 4


def normalize_name(name: str) -> str:
    return " ".join(name.split()).lower()


def validate_meal_plan(meals: List[Meal], number_of_meals: int) -> None:
    """Enforce the exact-count and no-duplicate invariants on a final plan.

    Raises:
        GenerationFailed: If either invariant does not hold.
    """
    if len(meals) != number_of_meals:
        raise GenerationFailed(f"expected {number_of_meals} meals, model returned {len(meals)}")

    seen = set()
    for meal in meals:
        key = normalize_name(meal.name)
        if key in seen:
            raise GenerationFailed(f"meal '{meal.name}' appears more than once")
        seen.add(key)


class MealPlanGenerator:
    """Drives an OpenAI chat model through the search-then-answer loop."""

    def __init__(
        self,
        openai_client: openai.OpenAI,
        search_adapter: RecipeSearchAdapter,
        model: str = OPENAI_MODEL,
        max_tool_rounds: int = MAX_TOOL_ROUNDS,
    ):
        self.openai_client = openai_client
        self.search_adapter = search_adapter
        self.model = model
        self.max_tool_rounds = max_tool_rounds

    def generate(self, request: MealPlanRequest) -> List[Meal]:
        """Produce exactly `request.number_of_meals` distinct meals.

        Raises:
            GenerationFailed: On model errors, malformed final output, a wrong
                meal count, duplicate meals, or when the tool loop does not
                finish within `max_tool_rounds` rounds.
        """
        prompt = MealPlanPrompt(
            dietary_restrictions=request.dietary_restrictions,
            cuisine_preferences=request.cuisine_preferences,
            number_of_meals=request.number_of_meals,
        )
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": str(prompt)},
        ]

        for round_no in range(1, self.max_tool_rounds + 1):
            message = self._complete(messages)

            if not message.tool_calls:
                meals = self._parse_final_answer(message.content)
                validate_meal_plan(meals, request.number_of_meals)
                logger.info("Generated %s meals after %s model round(s)", len(meals), round_no)
                return meals

            logger.info("Round %s: model requested %s tool call(s)", round_no, len(message.tool_calls))
            messages.append({
                "role": "assistant",
                "content": message.content,
                "tool_calls": [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {"name": call.function.name, "arguments": call.function.arguments},
                    }
                    for call in message.tool_calls
                ],
            })
            messages.extend(self._run_tool_calls(message.tool_calls))

        raise GenerationFailed(f"no final answer after {self.max_tool_rounds} model rounds")

    def _complete(self, messages: List[Dict[str, Any]]):
        try:
            resp = self.openai_client.chat.completions.create(
                model=self.model,
                messages=messages,
                tools=[SEARCH_RECIPES_TOOL],
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as exc:
            raise GenerationFailed(f"model call failed: {exc}") from exc

        if not resp.choices:
            raise GenerationFailed("model returned no choices")
        return resp.choices[0].message

    def _parse_final_answer(self, content: Optional[str]) -> List[Meal]:
        if not content:
            raise GenerationFailed("model returned an empty final answer")
        try:
            output = MealPlanOutput.model_validate_json(content)
        except ValidationError as exc:
            logger.debug("Invalid final answer from model: %s", content)
            raise GenerationFailed(f"final answer failed schema validation: {exc}") from exc
        return output.meal_plan

    def _run_tool_calls(self, tool_calls) -> List[Dict[str, Any]]:
        """Answer every tool call of one assistant turn, preserving call order."""
        workers = max(1, min(MAX_PARALLEL_SEARCHES, len(tool_calls)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(self._run_tool_call, tool_calls))

        return [
            {"role": "tool", "tool_call_id": call.id, "content": json.dumps(result)}
            for call, result in zip(tool_calls, results)
        ]

    def _run_tool_call(self, call) -> Any:
        name = call.function.name
        if name != SEARCH_RECIPES_TOOL["function"]["name"]:
            logger.warning("Model requested unknown tool: %s", name)
            return {"error": f"Unknown tool '{name}'."}

        try:
            arguments = json.loads(call.function.arguments or "{}")
            query = arguments["query"]
        except (ValueError, TypeError, KeyError):
            logger.warning("Bad arguments for %s: %r", name, call.function.arguments)
            return {"error": "Arguments must be a JSON object with a string 'query'."}

        if not isinstance(query, str) or not query.strip():
            return {"error": "Arguments must be a JSON object with a string 'query'."}

        try:
            recipes = self.search_adapter.search(query)
        except UpstreamUnavailable as exc:
            logger.warning("Recipe search failed for %r: %s", query, exc.details)
            return {"error": "Recipe search failed. Try a different query."}

        return [recipe.model_dump(by_alias=True) for recipe in recipes]
