"""
Repository layer.

Repositories are the only code that talks to the store.  They are plain
classes constructed with a ``Store``; every public method is a coroutine
that performs exactly one unit of work in a worker thread and either
returns a schema object or raises one of ``ConstraintViolation``,
``NotFound`` or ``StoreUnavailable``.
"""

from .post_repository import PostRepository
from .user_repository import UserRepository

__all__ = ["PostRepository", "UserRepository"]
