"""SQLAlchemy ORM models for the meal plan service.

Three tables: `users` (profile preferences keyed by the verified user id),
`meal_plans` (one row per generated plan) and `saved_recipes` (one row per
meal of a plan). Meal payloads and snapshots are stored as JSON-encoded text.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Profile of a verified user; holds the preferences snapshotted into new plans."""

    __tablename__ = "users"
    id = Column(String(128), primary_key=True)
    preferences = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class MealPlan(Base):
    """A generated meal plan. Written once and never mutated."""

    __tablename__ = "meal_plans"
    id = Column(String(32), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    meals = Column(Text, nullable=False)
    dietary_restrictions = Column(Text, nullable=False)
    cuisine_preferences = Column(Text, nullable=False)
    number_of_meals = Column(Integer, nullable=False)
    preferences_snapshot = Column(Text, nullable=False, default="{}")


class SavedRecipe(Base):
    """One meal of a plan, saved independently for later annotation."""

    __tablename__ = "saved_recipes"
    id = Column(String(32), primary_key=True)
    meal = Column(Text, nullable=False)
    original_plan_id = Column(String(32), ForeignKey('meal_plans.id'), nullable=False, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    saved_at = Column(DateTime, nullable=False, default=utcnow)
    user_notes = Column(Text, nullable=False, default="")
