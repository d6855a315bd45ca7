"""Saved recipes API router."""

from fastapi import APIRouter, Depends
from typing import List

from api.deps import get_current_user_id, get_writer
from schemas import SavedRecipeResponse
from services.plan_persistence import PlanPersistenceWriter

router = APIRouter(prefix="/api/saved-recipes", tags=["saved-recipes"])


@router.get("", response_model=List[SavedRecipeResponse])
def list_saved_recipes(
    limit: int = 100,
    skip: int = 0,
    user_id: str = Depends(get_current_user_id),
    writer: PlanPersistenceWriter = Depends(get_writer),
):
    """Return every meal the caller has saved from past plans, newest first."""
    return writer.list_saved_recipes(user_id, skip=skip, limit=limit)
