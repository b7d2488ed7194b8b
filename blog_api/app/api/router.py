"""
Top‑level router.

Aggregates the resource routers.  Routes are served at the root of the
application (``/users``, ``/posts``) without a version prefix.
"""

from fastapi import APIRouter

from .endpoints import posts, root, users

router = APIRouter()

router.include_router(root.router, tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
