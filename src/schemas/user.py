"""User schema definitions.

Request and response models for signup and login. Field names are snake_case
in Python and camelCase on the wire.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """Signup payload. Every field is required, but presence is checked by the
    route so that a missing field yields 400 instead of 422."""

    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    password_hash: Optional[str] = Field(
        default=None,
        alias="passwordHash",
        description="Opaque hash computed by the client; compared by equality.",
    )


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    password_hash: Optional[str] = Field(default=None, alias="passwordHash")


class User(BaseModel):
    """Public identity fields of a user."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    username: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")


class SignupResponse(User):
    success: bool = True


class LoginResponse(User):
    success: bool = True
    completed_ids: List[int] = Field(
        default_factory=list,
        alias="completedIds",
        description="Question ids the user has completed, ascending.",
    )
