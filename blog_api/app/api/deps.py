"""
FastAPI dependencies.

The ``Store`` lives on ``app.state`` (set up by ``create_app``); these
helpers build a repository bound to it for each request.  Tests can
swap a repository out through ``app.dependency_overrides``.
"""

from fastapi import Request

from ..core.db import Store
from ..repositories import PostRepository, UserRepository


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_user_repository(request: Request) -> UserRepository:
    return UserRepository(get_store(request))


def get_post_repository(request: Request) -> PostRepository:
    return PostRepository(get_store(request))
