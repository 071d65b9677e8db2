"""
Pydantic Schemas - Data Validation Models

Defines the schemas exchanged by the users API:
- User: a persisted row, as returned to clients
- UserPayload: the request body accepted by create and update

Usage:
    from utils.schemas import User, UserPayload

    payload = UserPayload.model_validate({"name": "Alice"})
    assert payload.email == ""
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """A row of the users table.

    Every field is required; a NULL column fails validation.
    """

    model_config = ConfigDict(strict=True)

    id: int = Field(..., description="Database-assigned user ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address (not validated)")


class UserPayload(BaseModel):
    """Request body for creating or overwriting a user.

    Missing or null fields default to the empty string. Any `id` in the body
    is ignored; the id always comes from the database or the URL path.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")

    @field_validator("name", "email", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat JSON null like an absent field."""
        return "" if v is None else v
