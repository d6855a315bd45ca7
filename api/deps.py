"""Dependency helpers exposing the services built at startup.

The lifespan handler in `main.py` stores the orchestrator on `app.state`;
tests replace these functions through `app.dependency_overrides`.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from services.identity import IdentityVerifier, bearer_token
from services.meal_plan_orchestrator import MealPlanOrchestrator
from services.plan_persistence import PlanPersistenceWriter


def get_orchestrator(request: Request) -> MealPlanOrchestrator:
    """Return the process-wide meal plan orchestrator."""
    return request.app.state.orchestrator


def get_writer(orchestrator: MealPlanOrchestrator = Depends(get_orchestrator)) -> PlanPersistenceWriter:
    return orchestrator.writer


def get_verifier(orchestrator: MealPlanOrchestrator = Depends(get_orchestrator)) -> IdentityVerifier:
    return orchestrator.verifier


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    verifier: IdentityVerifier = Depends(get_verifier),
) -> str:
    """Verify the request's bearer token and return the caller's user id.

    Raises:
        AuthenticationError: If the header is missing or the token is rejected.
    """
    return verifier.verify(bearer_token(authorization))
