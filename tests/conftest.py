"""Shared fixtures: an in-memory database and a plan writer bound to it."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import init_db
from schemas.meal_plan_schema import MealPlanRequest
from services.plan_persistence import PlanPersistenceWriter


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with all tables created."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def writer(session_factory):
    return PlanPersistenceWriter(session_factory)


@pytest.fixture
def plan_request():
    return MealPlanRequest(
        dietary_restrictions="Vegetarian",
        cuisine_preferences="Italian",
        number_of_meals=3,
    )
