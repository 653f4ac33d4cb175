"""User domain entity."""

from pydantic import Field

from src.user_api.entities._base import Entity


class User(Entity):
    """User record as owned by the store.

    The identifier is assigned by the store when the user is created and
    never changes afterwards.
    """

    name: str | None = Field(default=None, description="User's display name")
    email: str | None = Field(default=None, description="User's email address")
    phone: str | None = Field(default=None, description="User's phone number")
    address: str | None = Field(default=None, description="User's postal address")
