"""Plan persistence.

Writes a generated plan to `meal_plans` and then, independently, one
`saved_recipes` row per meal. The two steps are not one transaction: a
failed saved-recipe row is logged and skipped while its siblings are still
written. Also serves the read side used by the history, saved-recipe and
profile endpoints.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.exceptions import NotFoundError, PersistenceError
from core.logger import get_logger
from core.repository import BaseRepository
from database import models
from schemas.meal_plan_schema import Meal, MealPlanRecordResponse, MealPlanRequest, SavedRecipeResponse
from schemas.user_schema import UserPreferences

logger = get_logger("services.plan_persistence")


def new_id() -> str:
    return uuid.uuid4().hex


def to_plan_response(plan: models.MealPlan) -> MealPlanRecordResponse:
    return MealPlanRecordResponse(
        id=plan.id,
        user_id=plan.user_id,
        created_at=plan.created_at,
        meals=[Meal(**m) for m in json.loads(plan.meals)],
        request=MealPlanRequest(
            dietary_restrictions=plan.dietary_restrictions,
            cuisine_preferences=plan.cuisine_preferences,
            number_of_meals=plan.number_of_meals,
        ),
        preferences_snapshot=json.loads(plan.preferences_snapshot or "{}"),
    )


def to_saved_recipe_response(row: models.SavedRecipe) -> SavedRecipeResponse:
    return SavedRecipeResponse(
        id=row.id,
        meal=Meal(**json.loads(row.meal)),
        original_plan_id=row.original_plan_id,
        user_id=row.user_id,
        saved_at=row.saved_at,
        user_notes=row.user_notes,
    )


class PlanPersistenceWriter:
    """Stores plans and their recipes through an injected session factory.

    Attributes:
        session_factory: `sessionmaker` for the write database.
        read_session_factory: `sessionmaker` for history reads (defaults to
            the write factory).
    """

    def __init__(self, session_factory: sessionmaker, read_session_factory: sessionmaker = None):
        self.session_factory = session_factory
        self.read_session_factory = read_session_factory or session_factory

    def persist(self, user_id: str, request: MealPlanRequest, meals: List[Meal]) -> str:
        """Write one MealPlan row and return its new id.

        Every call creates a new row; identical payloads are not deduplicated.

        Raises:
            PersistenceError: If the row cannot be written.
        """
        session = self.session_factory()
        try:
            snapshot = self._preferences_snapshot(session, user_id)
            plan = models.MealPlan(
                id=new_id(),
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
                meals=json.dumps([m.model_dump() for m in meals]),
                dietary_restrictions=request.dietary_restrictions,
                cuisine_preferences=request.cuisine_preferences,
                number_of_meals=request.number_of_meals,
                preferences_snapshot=json.dumps(snapshot),
            )
            BaseRepository(models.MealPlan, session).create(plan)
            logger.info("Meal plan %s stored for user %s (%s meals)", plan.id, user_id, len(meals))
            return plan.id
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Failed to store meal plan for user %s: %s", user_id, exc)
            raise PersistenceError(operation="persist") from exc
        finally:
            session.close()

    def persist_recipes(self, plan_id: str, user_id: str, meals: List[Meal]) -> int:
        """Write one SavedRecipe row per meal; return how many were written.

        Rows are committed one at a time. A row that fails is rolled back,
        logged and skipped.

        Raises:
            PersistenceError: If `plan_id` does not resolve to a stored plan.
        """
        session = self.session_factory()
        try:
            try:
                plan = session.get(models.MealPlan, plan_id)
            except SQLAlchemyError as exc:
                raise PersistenceError(operation="persist_recipes") from exc
            if plan is None:
                raise PersistenceError(f"Meal plan {plan_id} does not exist", operation="persist_recipes")

            repo = BaseRepository(models.SavedRecipe, session)
            written = 0
            for meal in meals:
                row = models.SavedRecipe(
                    id=new_id(),
                    meal=json.dumps(meal.model_dump()),
                    original_plan_id=plan_id,
                    user_id=user_id,
                    saved_at=datetime.now(timezone.utc),
                    user_notes="",
                )
                try:
                    repo.create(row)
                    written += 1
                except SQLAlchemyError as exc:
                    session.rollback()
                    logger.warning("Skipping saved recipe '%s' of plan %s: %s", meal.name, plan_id, exc)

            logger.info("Saved %s/%s recipes for plan %s", written, len(meals), plan_id)
            return written
        finally:
            session.close()

    def _preferences_snapshot(self, session, user_id: str) -> Dict[str, Any]:
        """Best-effort read of the user's stored preferences; `{}` when unavailable."""
        try:
            user = session.get(models.User, user_id)
            if user is None or not user.preferences:
                return {}
            snapshot = json.loads(user.preferences)
            return snapshot if isinstance(snapshot, dict) else {}
        except (SQLAlchemyError, ValueError) as exc:
            session.rollback()
            logger.warning("Could not read preferences for user %s: %s", user_id, exc)
            return {}

    def list_plans(self, user_id: str, skip: int = 0, limit: int = 50) -> List[MealPlanRecordResponse]:
        """Return the user's stored plans, newest first."""
        session = self.read_session_factory()
        try:
            repo = BaseRepository(models.MealPlan, session)
            plans = repo.list_for_user(user_id, models.MealPlan.created_at.desc(), skip=skip, limit=limit)
            return [to_plan_response(p) for p in plans]
        finally:
            session.close()

    def get_plan(self, user_id: str, plan_id: str) -> MealPlanRecordResponse:
        """Return one stored plan owned by `user_id`.

        Raises:
            NotFoundError: If the plan does not exist or belongs to another user.
        """
        session = self.read_session_factory()
        try:
            plan = BaseRepository(models.MealPlan, session).get_by_id(plan_id)
            if plan is None or plan.user_id != user_id:
                raise NotFoundError("MealPlan", plan_id)
            return to_plan_response(plan)
        finally:
            session.close()

    def list_saved_recipes(self, user_id: str, skip: int = 0, limit: int = 100) -> List[SavedRecipeResponse]:
        """Return the user's saved recipes, newest first."""
        session = self.read_session_factory()
        try:
            repo = BaseRepository(models.SavedRecipe, session)
            rows = repo.list_for_user(user_id, models.SavedRecipe.saved_at.desc(), skip=skip, limit=limit)
            return [to_saved_recipe_response(r) for r in rows]
        finally:
            session.close()

    def get_preferences(self, user_id: str) -> UserPreferences:
        """Return the user's profile preferences (empty when never saved)."""
        session = self.read_session_factory()
        try:
            user = session.get(models.User, user_id)
            if user is None or not user.preferences:
                return UserPreferences()
            stored = json.loads(user.preferences)
            return UserPreferences(**stored) if isinstance(stored, dict) else UserPreferences()
        except (ValueError, TypeError) as exc:
            logger.warning("Unreadable preferences for user %s: %s", user_id, exc)
            return UserPreferences()
        finally:
            session.close()

    def save_preferences(self, user_id: str, preferences: UserPreferences) -> UserPreferences:
        """Create or replace the user's profile preferences."""
        session = self.session_factory()
        try:
            user = session.get(models.User, user_id)
            if user is None:
                user = models.User(id=user_id)
                session.add(user)
            user.preferences = json.dumps(preferences.model_dump())
            session.commit()
            logger.info("Preferences saved for user %s", user_id)
            return preferences
        except SQLAlchemyError as exc:
            session.rollback()
            raise PersistenceError("Could not save your preferences.", operation="save_preferences") from exc
        finally:
            session.close()
