"""Startup wiring for the meal plan pipeline.

Every external client is built exactly once here and injected. A failure
raises `ConfigurationError` so the app refuses to start instead of failing
on the first request.
"""

import httpx
import openai

from core import config
from core.exceptions import ConfigurationError
from core.logger import get_logger
from database.database import ReadSessionLocal, WriteSessionLocal
from services.identity import FirebaseIdentityVerifier, init_firebase_app
from services.meal_plan_generator import MealPlanGenerator
from services.meal_plan_orchestrator import MealPlanOrchestrator
from services.plan_persistence import PlanPersistenceWriter
from services.recipe_search import RecipeSearchAdapter

logger = get_logger("services.factory")


def build_openai_client() -> openai.OpenAI:
    if not config.OPENAI_API_KEY:
        raise ConfigurationError("OPENAI_API_KEY is not set", config_key="OPENAI_API_KEY")
    return openai.OpenAI(api_key=config.OPENAI_API_KEY, timeout=config.OPENAI_TIMEOUT)


def build_orchestrator(http_client: httpx.Client) -> MealPlanOrchestrator:
    """Assemble the orchestrator and its collaborators.

    Args:
        http_client: Shared HTTP client for recipe search; the caller owns
            its lifetime.
    """
    firebase_app = init_firebase_app(config.FIREBASE_CREDENTIALS, config.FIREBASE_PROJECT_ID)
    verifier = FirebaseIdentityVerifier(firebase_app, check_revoked=config.AUTH_CHECK_REVOKED)

    search_adapter = RecipeSearchAdapter(
        http_client,
        base_url=config.MEALDB_BASE_URL,
        max_results=config.MAX_SEARCH_RESULTS,
    )
    generator = MealPlanGenerator(
        build_openai_client(),
        search_adapter,
        model=config.OPENAI_MODEL,
        max_tool_rounds=config.MAX_TOOL_ROUNDS,
    )
    writer = PlanPersistenceWriter(WriteSessionLocal, ReadSessionLocal)

    logger.info("Meal plan pipeline ready (model=%s, max_tool_rounds=%s)", config.OPENAI_MODEL, config.MAX_TOOL_ROUNDS)
    return MealPlanOrchestrator(verifier, generator, writer)
