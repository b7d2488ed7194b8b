"""
Pydantic models for post data.

The wire format uses camelCase for the author reference (``authorId``)
while Python code works with ``author_id``; ``populate_by_name`` lets
both spellings construct the models and FastAPI serializes responses by
alias.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PostBase(BaseModel):
    title: str = Field(..., json_schema_extra={"example": "Hello"})
    content: str = Field(..., json_schema_extra={"example": "First post"})


class PostCreate(PostBase):
    """Schema for creating a post."""

    author_id: int = Field(..., alias="authorId", json_schema_extra={"example": 1})

    model_config = {
        "populate_by_name": True,
    }


class PostUpdate(BaseModel):
    """Schema for updating a post.

    All fields are optional; only fields that were explicitly provided
    (``model_fields_set``) are written to the store.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    published: Optional[bool] = None

    def changes(self) -> dict:
        """Return only the fields present in the request."""
        return self.model_dump(exclude_unset=True)


class PostRead(PostBase):
    """Schema for reading a post from the API."""

    id: int
    published: bool = Field(False, json_schema_extra={"example": False})
    author_id: int = Field(..., alias="authorId", json_schema_extra={"example": 1})

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class Author(BaseModel):
    """Author embedded in ``GET /posts`` entries."""

    id: int
    name: str
    email: str


class PostWithAuthor(PostRead):
    """A post together with its author."""

    author: Author
