"""Tests for the plan persistence writer against an in-memory database."""

import json

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from core.exceptions import NotFoundError, PersistenceError
from database import models
from schemas.user_schema import UserPreferences
from services.plan_persistence import PlanPersistenceWriter
from dummies import USER_ID, make_meals


def flaky_session_factory(engine, fail_on):
    """Session factory whose n-th commit (1-based, across sessions) raises."""
    commits = {"n": 0}

    class FlakySession(Session):
        def commit(self):
            commits["n"] += 1
            if commits["n"] in fail_on:
                raise OperationalError("INSERT", {}, Exception("disk I/O error"))
            super().commit()

    return sessionmaker(bind=engine, class_=FlakySession)


def test_persist_writes_plan_with_request_snapshot(writer, session_factory, plan_request):
    meals = make_meals(3)

    plan_id = writer.persist(USER_ID, plan_request, meals)

    session = session_factory()
    try:
        plan = session.get(models.MealPlan, plan_id)
        assert plan.user_id == USER_ID
        assert plan.created_at is not None
        assert [m["name"] for m in json.loads(plan.meals)] == ["Meal 1", "Meal 2", "Meal 3"]
        assert plan.dietary_restrictions == "Vegetarian"
        assert plan.cuisine_preferences == "Italian"
        assert plan.number_of_meals == 3
        assert json.loads(plan.preferences_snapshot) == {}
    finally:
        session.close()


def test_persist_merges_stored_preferences(writer, plan_request):
    writer.save_preferences(USER_ID, UserPreferences(dietary_restrictions="Vegan", cuisine_preferences="Mexican"))

    plan_id = writer.persist(USER_ID, plan_request, make_meals(3))

    record = writer.get_plan(USER_ID, plan_id)
    assert record.preferences_snapshot == {"dietary_restrictions": "Vegan", "cuisine_preferences": "Mexican"}


def test_unreadable_preferences_fall_back_to_empty_snapshot(writer, session_factory, plan_request):
    session = session_factory()
    session.add(models.User(id=USER_ID, preferences="{broken json"))
    session.commit()
    session.close()

    plan_id = writer.persist(USER_ID, plan_request, make_meals(3))

    assert writer.get_plan(USER_ID, plan_id).preferences_snapshot == {}


def test_persist_is_not_deduplicated(writer, plan_request):
    """The same payload twice makes two history entries with different ids."""
    meals = make_meals(3)
    first = writer.persist(USER_ID, plan_request, meals)
    second = writer.persist(USER_ID, plan_request, meals)

    assert first != second
    assert len(writer.list_plans(USER_ID)) == 2


def test_persist_recipes_writes_one_row_per_meal(writer, plan_request):
    meals = make_meals(3)
    plan_id = writer.persist(USER_ID, plan_request, meals)

    written = writer.persist_recipes(plan_id, USER_ID, meals)

    assert written == 3
    saved = writer.list_saved_recipes(USER_ID)
    assert sorted(r.meal.name for r in saved) == ["Meal 1", "Meal 2", "Meal 3"]
    assert all(r.original_plan_id == plan_id for r in saved)
    assert all(r.user_notes == "" for r in saved)


def test_persist_recipes_requires_existing_plan(writer):
    with pytest.raises(PersistenceError):
        writer.persist_recipes("does-not-exist", USER_ID, make_meals(1))
    assert writer.list_saved_recipes(USER_ID) == []


def test_failed_recipe_write_is_skipped_and_siblings_proceed(engine, writer, plan_request):
    meals = make_meals(3)
    plan_id = writer.persist(USER_ID, plan_request, meals)
    flaky = PlanPersistenceWriter(flaky_session_factory(engine, fail_on={2}))

    written = flaky.persist_recipes(plan_id, USER_ID, meals)

    assert written == 2
    assert sorted(r.meal.name for r in writer.list_saved_recipes(USER_ID)) == ["Meal 1", "Meal 3"]


def test_plan_write_failure_raises_persistence_error(engine, writer, plan_request):
    flaky = PlanPersistenceWriter(flaky_session_factory(engine, fail_on={1}))

    with pytest.raises(PersistenceError):
        flaky.persist(USER_ID, plan_request, make_meals(3))
    assert writer.list_plans(USER_ID) == []


def test_history_is_scoped_to_owner(writer, plan_request):
    plan_id = writer.persist(USER_ID, plan_request, make_meals(3))
    other_id = writer.persist("someone-else", plan_request, make_meals(3))

    assert [p.id for p in writer.list_plans(USER_ID)] == [plan_id]
    with pytest.raises(NotFoundError):
        writer.get_plan(USER_ID, other_id)
    with pytest.raises(NotFoundError):
        writer.get_plan(USER_ID, "missing")


def test_preferences_round_trip_and_default(writer):
    assert writer.get_preferences(USER_ID) == UserPreferences()

    writer.save_preferences(USER_ID, UserPreferences(dietary_restrictions="Keto"))
    writer.save_preferences(USER_ID, UserPreferences(dietary_restrictions="Paleo", cuisine_preferences="Greek"))

    assert writer.get_preferences(USER_ID) == UserPreferences(dietary_restrictions="Paleo", cuisine_preferences="Greek")


def test_unreadable_preferences_read_as_defaults(writer, session_factory):
    session = session_factory()
    session.add(models.User(id=USER_ID, preferences="{broken json"))
    session.commit()
    session.close()

    assert writer.get_preferences(USER_ID) == UserPreferences()
