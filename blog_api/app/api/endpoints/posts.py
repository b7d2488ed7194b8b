"""
Post endpoints.

``PUT /posts/{id}`` is a partial update: fields missing from the body
keep their stored values, and ``{}`` returns the post unchanged.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends, status

from blog_api.app.api.deps import get_post_repository
from blog_api.app.repositories import PostRepository
from blog_api.app.schemas.post import PostRead, PostWithAuthor
from blog_api.app.validators import parse_id, validate_post_create, validate_post_update


router = APIRouter()


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: Any = Body(None),
    repo: PostRepository = Depends(get_post_repository),
) -> PostRead:
    """Create a post.

    ``authorId`` must be a positive integer; an id that matches no user
    is rejected by the store's foreign key with 400.
    """
    data = validate_post_create(payload).unwrap()
    return await repo.create_post(data)


@router.get("", response_model=List[PostWithAuthor])
async def list_posts(repo: PostRepository = Depends(get_post_repository)) -> List[PostWithAuthor]:
    """List all posts with their authors."""
    return await repo.list_posts()


@router.put("/{post_id}", response_model=PostRead)
async def update_post(
    post_id: str,
    payload: Any = Body(None),
    repo: PostRepository = Depends(get_post_repository),
) -> PostRead:
    """Update the given fields of a post."""
    pid = parse_id(post_id)
    updates = validate_post_update(payload).unwrap()
    return await repo.update_post(pid, updates)


@router.delete("/{post_id}", response_model=PostRead)
async def delete_post(
    post_id: str,
    repo: PostRepository = Depends(get_post_repository),
) -> PostRead:
    """Delete a post and return it."""
    return await repo.delete_post(parse_id(post_id))
