"""
Pydantic models for user data.

A user is nothing more than a unique username and the opaque id the
service generates for it.
"""

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Payload of ``POST /api/exercise/new-user``."""

    username: str = Field(..., examples=["joe"])

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    username: str
    id: str

    model_config = {
        "from_attributes": True,
    }
