"""
Pydantic models for user data.

``UserCreate`` is the normalized registration payload, ``UserRead`` a
stored user and ``UserWithPosts`` the shape returned by ``GET /users``
where each user carries the posts it owns.
"""

from typing import List

from pydantic import BaseModel, Field

from .post import PostRead


class UserBase(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Ada Lovelace"})
    email: str = Field(..., json_schema_extra={"example": "ada@example.com"})


class UserCreate(UserBase):
    """Schema for registering a user."""
    pass


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class UserWithPosts(UserRead):
    """A user together with every post it authored."""

    posts: List[PostRead] = Field(default_factory=list)
