"""Meal plan API router.

`POST /api/meal-plans` runs the full pipeline for the caller. The two GET
endpoints serve the caller's stored plan history.
"""

from fastapi import APIRouter, Depends
from typing import List

from api.deps import get_current_user_id, get_orchestrator, get_writer
from core.logger import get_logger
from schemas import GenerateMealPlanRequest, MealPlanRecordResponse, MealPlanResponse
from services.meal_plan_orchestrator import MealPlanOrchestrator
from services.plan_persistence import PlanPersistenceWriter

logger = get_logger("api.meal_plans")
router = APIRouter(prefix="/api/meal-plans", tags=["meal-plans"])


@router.post("", response_model=MealPlanResponse)
def create_meal_plan(
    payload: GenerateMealPlanRequest,
    orchestrator: MealPlanOrchestrator = Depends(get_orchestrator),
):
    """Generate, store and return a meal plan.

    The response always carries the complete plan; `plan_id` is null when
    the plan could not be stored.

    Raises:
        AuthenticationError: If the credential token is rejected (401).
        GenerationFailed: If the plan could not be generated (502).
    """
    request = payload.to_plan_request()
    logger.info(
        "Meal plan requested: %s meals, diet=%r, cuisine=%r",
        request.number_of_meals, request.dietary_restrictions, request.cuisine_preferences
    )
    result = orchestrator.run(request, payload.credential_token)
    return MealPlanResponse(meal_plan=result.meals, plan_id=result.plan_id)


@router.get("", response_model=List[MealPlanRecordResponse])
def list_meal_plans(
    limit: int = 50,
    skip: int = 0,
    user_id: str = Depends(get_current_user_id),
    writer: PlanPersistenceWriter = Depends(get_writer),
):
    """Return the caller's stored plans, newest first."""
    return writer.list_plans(user_id, skip=skip, limit=limit)


@router.get("/{plan_id}", response_model=MealPlanRecordResponse)
def get_meal_plan(
    plan_id: str,
    user_id: str = Depends(get_current_user_id),
    writer: PlanPersistenceWriter = Depends(get_writer),
):
    """Return one of the caller's stored plans.

    Raises:
        NotFoundError: If the plan does not exist or belongs to someone else.
    """
    return writer.get_plan(user_id, plan_id)
