"""User profile API router.

Lets a signed-in user read and replace the default meal preferences that are
snapshotted into every plan generated for them afterwards.
"""

from fastapi import APIRouter, Depends

from api.deps import get_current_user_id, get_writer
from core.logger import get_logger
from schemas import UserPreferences
from services.plan_persistence import PlanPersistenceWriter

logger = get_logger("api.users")
router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me/preferences", response_model=UserPreferences)
def get_my_preferences(
    user_id: str = Depends(get_current_user_id),
    writer: PlanPersistenceWriter = Depends(get_writer),
):
    """Return the caller's saved preferences (empty strings when never set)."""
    return writer.get_preferences(user_id)


@router.put("/me/preferences", response_model=UserPreferences)
def update_my_preferences(
    payload: UserPreferences,
    user_id: str = Depends(get_current_user_id),
    writer: PlanPersistenceWriter = Depends(get_writer),
):
    """Create or replace the caller's preferences.

    Raises:
        PersistenceError: If the preferences could not be stored.
    """
    logger.info("Updating preferences for user %s", user_id)
    return writer.save_preferences(user_id, payload)
