"""Meal plan pipeline: authenticate, generate, persist.

START -> AUTHENTICATING -> GENERATING -> PERSISTING -> DONE, with an exit to
FAILED from authentication or generation. Authentication and generation
errors abort the run; persistence is best-effort and a failure there only
gets logged and recorded on the result, so the generated plan is still
returned to the caller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from core.exceptions import AppException
from core.logger import get_logger
from schemas.meal_plan_schema import Meal, MealPlanRequest
from services.identity import IdentityVerifier
from services.meal_plan_generator import MealPlanGenerator
from services.plan_persistence import PlanPersistenceWriter

logger = get_logger("services.meal_plan_orchestrator")


class PipelineState(str, Enum):
    START = "start"
    AUTHENTICATING = "authenticating"
    GENERATING = "generating"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class MealPlanResult:
    """Outcome of one pipeline run.

    `plan_id` is None and `persistence_error` is set when saving failed;
    `meals` is complete either way.
    """

    meals: List[Meal]
    user_id: str
    plan_id: Optional[str] = None
    saved_recipe_count: int = 0
    persistence_error: Optional[str] = None
    states: List[PipelineState] = field(default_factory=list)


class MealPlanOrchestrator:
    """Sequences the identity verifier, generator and persistence writer."""

    def __init__(
        self,
        verifier: IdentityVerifier,
        generator: MealPlanGenerator,
        writer: PlanPersistenceWriter,
    ):
        self.verifier = verifier
        self.generator = generator
        self.writer = writer

    def run(self, request: MealPlanRequest, credential_token: str) -> MealPlanResult:
        """Run the pipeline for one request.

        Raises:
            AuthenticationError: If the credential is rejected. Nothing is
                generated or written.
            GenerationFailed: If generation fails. Nothing is written.
        """
        states = [PipelineState.START]

        def enter(state: PipelineState) -> None:
            logger.debug("Pipeline %s -> %s", states[-1].value, state.value)
            states.append(state)

        try:
            enter(PipelineState.AUTHENTICATING)
            user_id = self.verifier.verify(credential_token)

            enter(PipelineState.GENERATING)
            meals = self.generator.generate(request)
        except AppException as exc:
            enter(PipelineState.FAILED)
            logger.warning("Pipeline failed in %s: %s %s", states[-2].value, type(exc).__name__, exc.details)
            raise

        enter(PipelineState.PERSISTING)
        result = MealPlanResult(meals=meals, user_id=user_id, states=states)
        try:
            result.plan_id = self.writer.persist(user_id, request, meals)
            result.saved_recipe_count = self.writer.persist_recipes(result.plan_id, user_id, meals)
        except Exception as exc:
            result.persistence_error = str(exc)
            logger.exception("Persisting meal plan for user %s failed; returning generated plan", user_id)

        enter(PipelineState.DONE)
        logger.info(
            "Meal plan ready for user %s: %s meals, plan_id=%s, saved_recipes=%s",
            user_id, len(meals), result.plan_id, result.saved_recipe_count
        )
        return result
