"""Prompt text for the meal plan generator."""

from typing import Optional


SYSTEM_PROMPT = """
You are a personal meal planning assistant.
You ground every meal you suggest in real recipes found with the `searchRecipes` tool;
never invent a recipe that the tool did not return.

When you are finished, answer with a single JSON object and nothing else, shaped like this:

{
  "mealPlan": [
    {
      "name": "Recipe name exactly as returned by the tool",
      "ingredients": ["1 tbsp Olive Oil", "2 Onions"],
      "instructions": "Instructions as returned by the tool",
      "imageUrl": "https://... or null",
      "sourceUrl": "https://... or null",
      "calories": 650,
      "macros": "Protein: 25g, Carbs: 70g, Fat: 28g"
    }
  ]
}
""".strip()


MEAL_PLAN_PROMPT = """
Your goal is to generate a meal plan with {number_of_meals} unique meals based on the user's preferences.

User Preferences:
- Dietary Restrictions: {dietary_restrictions}
- Cuisine Preferences: {cuisine_preferences}

Instructions:
1. Based on the cuisine preferences and dietary restrictions, come up with search queries to find suitable recipes. For example, if the user wants "Italian" and "Vegetarian", you could search for "Vegetarian Lasagna".
2. Use the `searchRecipes` tool to find real recipes for each meal. If a search returns nothing or fails, try a different query.
3. From the search results, select a variety of meals that best fit the user's request. DO NOT use the same meal twice.
4. For each selected meal, populate the output with its details (name, ingredients, instructions, imageUrl, sourceUrl).
5. Also provide an estimated calorie count and macros for each meal.
6. Return the final plan as a structured JSON object. Ensure you generate exactly {number_of_meals} meals.
""".strip()


class MealPlanPrompt:
    def __init__(
        self,
        *,
        dietary_restrictions: str,
        cuisine_preferences: str,
        number_of_meals: int,
        template: Optional[str] = None,
    ) -> None:
        self.template = MEAL_PLAN_PROMPT if template is None else template
        self.dietary_restrictions = dietary_restrictions
        self.cuisine_preferences = cuisine_preferences
        self.number_of_meals = number_of_meals

    def __str__(self) -> str:
        return self.template.format(
            dietary_restrictions=self.dietary_restrictions,
            cuisine_preferences=self.cuisine_preferences,
            number_of_meals=self.number_of_meals,
        )
