"""
User endpoints.

Bodies are taken as raw JSON and run through ``app.validators`` so that
every broken field rule is reported at once in a 400 response.
Repository errors propagate to the handlers in ``core.errors``.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends, status

from blog_api.app.api.deps import get_user_repository
from blog_api.app.repositories import UserRepository
from blog_api.app.schemas.user import UserRead, UserWithPosts
from blog_api.app.validators import parse_id, validate_user_create


router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Any = Body(None),
    repo: UserRepository = Depends(get_user_repository),
) -> UserRead:
    """Register a new user.

    Requires a non-empty ``name`` and a syntactically valid ``email``.
    A duplicate email is rejected by the store with 400.
    """
    data = validate_user_create(payload).unwrap()
    return await repo.create_user(data)


@router.get("", response_model=List[UserWithPosts])
async def list_users(repo: UserRepository = Depends(get_user_repository)) -> List[UserWithPosts]:
    """List all users with their posts."""
    return await repo.list_users()


@router.delete("/{user_id}", response_model=UserRead)
async def delete_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
) -> UserRead:
    """Delete a user and return it.

    Unknown ids answer 400.  A user that still owns posts cannot be
    deleted; the store's foreign key error is returned as 400.
    """
    return await repo.delete_user(parse_id(user_id))
