"""
Persistence for posts.

Updates are partial: only the fields the client sent are written, so an
empty update leaves the row untouched and simply returns it.
"""

import asyncio
import logging
import sqlite3
from typing import List

from ..core.db import Store
from ..core.errors import NotFound
from ..schemas.post import Author, PostCreate, PostRead, PostUpdate, PostWithAuthor


logger = logging.getLogger(__name__)

_SELECT_POST = "SELECT id, title, content, published, author_id FROM posts WHERE id = ?"

# Request field -> column.  Anything else never reaches the SQL.
_UPDATABLE_COLUMNS = {
    "title": "title",
    "content": "content",
    "published": "published",
}


def _row_to_post(row: sqlite3.Row) -> PostRead:
    return PostRead(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        published=bool(row["published"]),
        author_id=row["author_id"],
    )


class PostRepository:
    """Create, list, update and delete posts."""

    def __init__(self, store: Store):
        self.store = store

    async def create_post(self, data: PostCreate) -> PostRead:
        """Insert a post for ``data.author_id``.

        An author id with no matching user violates the foreign key and
        surfaces as ``ConstraintViolation``.
        """
        return await asyncio.to_thread(self._create_post, data)

    async def list_posts(self) -> List[PostWithAuthor]:
        """Return all posts, each with its author."""
        return await asyncio.to_thread(self._list_posts)

    async def update_post(self, post_id: int, updates: PostUpdate) -> PostRead:
        """Apply the fields present in ``updates`` and return the post.

        Raises ``NotFound`` if the post does not exist.
        """
        return await asyncio.to_thread(self._update_post, post_id, updates)

    async def delete_post(self, post_id: int) -> PostRead:
        """Delete a post and return the row as it was before deletion."""
        return await asyncio.to_thread(self._delete_post, post_id)

    def _create_post(self, data: PostCreate) -> PostRead:
        logger.info("Creating post '%s' for author %s", data.title, data.author_id)
        with self.store.session() as conn:
            cursor = conn.execute(
                "INSERT INTO posts (title, content, author_id) VALUES (?, ?, ?)",
                (data.title, data.content, data.author_id),
            )
            row = conn.execute(_SELECT_POST, (cursor.lastrowid,)).fetchone()
        return _row_to_post(row)

    def _list_posts(self) -> List[PostWithAuthor]:
        with self.store.session() as conn:
            rows = conn.execute(
                """
                SELECT p.id, p.title, p.content, p.published, p.author_id,
                       u.name AS author_name, u.email AS author_email
                FROM posts p
                JOIN users u ON u.id = p.author_id
                ORDER BY p.id
                """
            ).fetchall()
        return [
            PostWithAuthor(
                **_row_to_post(row).model_dump(),
                author=Author(id=row["author_id"], name=row["author_name"], email=row["author_email"]),
            )
            for row in rows
        ]

    def _update_post(self, post_id: int, updates: PostUpdate) -> PostRead:
        changes = updates.changes()
        with self.store.session() as conn:
            if not conn.execute("SELECT id FROM posts WHERE id = ?", (post_id,)).fetchone():
                raise NotFound(f"Post {post_id} not found")
            if changes:
                fields = []
                values = []
                for key, value in changes.items():
                    fields.append(f"{_UPDATABLE_COLUMNS[key]} = ?")
                    # Booleans are stored as 0/1
                    values.append(int(value) if isinstance(value, bool) else value)
                values.append(post_id)
                conn.execute(f"UPDATE posts SET {', '.join(fields)} WHERE id = ?", tuple(values))
                logger.info("Updated post %s: %s", post_id, ", ".join(changes))
            row = conn.execute(_SELECT_POST, (post_id,)).fetchone()
        return _row_to_post(row)

    def _delete_post(self, post_id: int) -> PostRead:
        with self.store.session() as conn:
            row = conn.execute(_SELECT_POST, (post_id,)).fetchone()
            if not row:
                raise NotFound(f"Post {post_id} not found")
            conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
        logger.info("Deleted post %s", post_id)
        return _row_to_post(row)
