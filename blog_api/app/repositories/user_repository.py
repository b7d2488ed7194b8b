"""
Persistence for users.

``GET /users`` returns every user with the posts it authored; the join
is done in a single ``LEFT JOIN`` query and folded into
``UserWithPosts`` objects in Python, preserving id order.
"""

import asyncio
import logging
from typing import Dict, List

from ..core.db import Store
from ..core.errors import NotFound
from ..schemas.post import PostRead
from ..schemas.user import UserCreate, UserRead, UserWithPosts


logger = logging.getLogger(__name__)


class UserRepository:
    """Create, list and delete users."""

    def __init__(self, store: Store):
        self.store = store

    async def create_user(self, data: UserCreate) -> UserRead:
        """Insert a user and return it with its assigned id.

        A duplicate email is rejected by the ``UNIQUE`` constraint and
        surfaces as ``ConstraintViolation``.
        """
        return await asyncio.to_thread(self._create_user, data)

    async def list_users(self) -> List[UserWithPosts]:
        """Return all users, each with its posts."""
        return await asyncio.to_thread(self._list_users)

    async def delete_user(self, user_id: int) -> UserRead:
        """Delete a user and return the row as it was before deletion.

        Raises ``NotFound`` if there is no such user.  Users that still
        own posts cannot be deleted: the foreign key on ``posts`` makes
        the store reject the statement (``ConstraintViolation``).
        """
        return await asyncio.to_thread(self._delete_user, user_id)

    def _create_user(self, data: UserCreate) -> UserRead:
        logger.info("Creating user %s", data.email)
        with self.store.session() as conn:
            cursor = conn.execute(
                "INSERT INTO users (name, email) VALUES (?, ?)",
                (data.name, data.email),
            )
            user_id = cursor.lastrowid
        logger.info("Created user %s with id %s", data.email, user_id)
        return UserRead(id=user_id, name=data.name, email=data.email)

    def _list_users(self) -> List[UserWithPosts]:
        with self.store.session() as conn:
            rows = conn.execute(
                """
                SELECT u.id AS user_id, u.name, u.email,
                       p.id AS post_id, p.title, p.content, p.published, p.author_id
                FROM users u
                LEFT JOIN posts p ON p.author_id = u.id
                ORDER BY u.id, p.id
                """
            ).fetchall()
        users: Dict[int, UserWithPosts] = {}
        for row in rows:
            user = users.get(row["user_id"])
            if user is None:
                user = UserWithPosts(id=row["user_id"], name=row["name"], email=row["email"])
                users[row["user_id"]] = user
            if row["post_id"] is not None:
                user.posts.append(
                    PostRead(
                        id=row["post_id"],
                        title=row["title"],
                        content=row["content"],
                        published=bool(row["published"]),
                        author_id=row["author_id"],
                    )
                )
        return list(users.values())

    def _delete_user(self, user_id: int) -> UserRead:
        with self.store.session() as conn:
            row = conn.execute(
                "SELECT id, name, email FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            if not row:
                raise NotFound(f"User {user_id} not found")
            conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        logger.info("Deleted user %s", user_id)
        return UserRead(id=row["id"], name=row["name"], email=row["email"])
