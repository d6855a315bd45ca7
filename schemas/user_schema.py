"""Schemas for user profile preferences."""

from pydantic import Field

from .base_schema import CamelModel


class UserPreferences(CamelModel):
    """Default preferences shown on the profile and snapshotted into new plans."""

    dietary_restrictions: str = Field("", examples=["Vegetarian"], description="Free-text dietary restrictions")
    cuisine_preferences: str = Field("", examples=["Italian, Mexican"], description="Free-text cuisine preferences")
