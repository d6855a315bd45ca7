"""Tests for the TheMealDB search adapter."""

import httpx
import pytest

from core.exceptions import UpstreamUnavailable
from services.recipe_search import RecipeSearchAdapter


def mealdb_meal(i, slots=None):
    """Build one upstream record; `slots` maps slot number -> (measure, ingredient)."""
    meal = {
        "idMeal": str(52000 + i),
        "strMeal": f"Recipe {i}",
        "strInstructions": f"Step for recipe {i}.",
        "strMealThumb": f"https://www.themealdb.com/images/{i}.jpg",
        "strSource": None,
        "strCategory": "Vegetarian",
    }
    for n in range(1, 21):
        measure, ingredient = (slots or {}).get(n, ("", ""))
        meal[f"strIngredient{n}"] = ingredient
        meal[f"strMeasure{n}"] = measure
    return meal


def make_adapter(handler, max_results=5):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return RecipeSearchAdapter(client, base_url="https://mealdb.test/api/json/v1/1", max_results=max_results)


def test_search_sends_query_and_maps_fields():
    """The free-text query goes out as `s` and each record maps to a Recipe."""
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["s"] = request.url.params["s"]
        return httpx.Response(200, json={"meals": [mealdb_meal(1, {1: ("200g", "Pasta")})]})

    recipes = make_adapter(handler).search("Vegetarian Lasagna")

    assert seen == {"path": "/api/json/v1/1/search.php", "s": "Vegetarian Lasagna"}
    assert len(recipes) == 1
    recipe = recipes[0]
    assert recipe.name == "Recipe 1"
    assert recipe.instructions == "Step for recipe 1."
    assert recipe.image_url == "https://www.themealdb.com/images/1.jpg"
    assert recipe.source_url is None
    assert recipe.ingredients == ["200g Pasta"]


def test_blank_ingredient_slots_are_skipped_in_order():
    """Slots 1, 3, 5 populated and 2, 4 blank yield exactly three entries in slot order."""
    slots = {
        1: ("1 tbsp", "Olive Oil"),
        2: ("", ""),
        3: ("2", "Onions"),
        4: (None, None),
        5: ("400g", "Chopped Tomatoes"),
    }

    def handler(request):
        return httpx.Response(200, json={"meals": [mealdb_meal(1, slots)]})

    recipes = make_adapter(handler).search("tomato")

    assert recipes[0].ingredients == ["1 tbsp Olive Oil", "2 Onions", "400g Chopped Tomatoes"]


def test_whitespace_ingredient_is_blank_and_missing_measure_is_dropped():
    slots = {1: ("1 tsp", "  "), 2: (None, "Salt")}

    def handler(request):
        return httpx.Response(200, json={"meals": [mealdb_meal(1, slots)]})

    assert make_adapter(handler).search("salt")[0].ingredients == ["Salt"]


def test_results_truncated_to_first_five_in_upstream_order():
    """Eight candidates come back as the first five, order preserved."""
    def handler(request):
        return httpx.Response(200, json={"meals": [mealdb_meal(i) for i in range(1, 9)]})

    recipes = make_adapter(handler).search("chicken")

    assert [r.name for r in recipes] == [f"Recipe {i}" for i in range(1, 6)]


def test_null_meals_returns_empty_list():
    def handler(request):
        return httpx.Response(200, json={"meals": None})

    assert make_adapter(handler).search("nothing matches") == []


@pytest.mark.parametrize(
    "body",
    [
        b"<html>not json</html>",
        b'{"meals": "oops"}',
        b'{"meals": [{"idMeal": "1", "strMeal": "No instructions"}]}',
        b'{"meals": [{"idMeal": "1", "strMeal": "X", "strInstructions": "Y", "strIngredient1": 5}]}',
    ],
)
def test_invalid_body_degrades_to_empty_list(body):
    """Schema mismatches never raise; the model simply gets no candidates."""
    def handler(request):
        return httpx.Response(200, content=body)

    assert make_adapter(handler).search("anything") == []


def test_non_success_status_raises_upstream_unavailable():
    def handler(request):
        return httpx.Response(503)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        make_adapter(handler).search("soup")
    assert exc_info.value.details["status"] == 503


def test_transport_error_raises_upstream_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamUnavailable):
        make_adapter(handler).search("soup")
