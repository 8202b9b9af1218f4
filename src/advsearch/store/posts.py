"""Write access to posts, post meta and taxonomy terms.

The search itself only reads these tables; this repository exists to seed
them.
"""

from __future__ import annotations

import re

from loguru import logger

from advsearch.core.types import Post
from advsearch.store.database import Database


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class PostRepository:
    """Insert and read posts and their meta/term data."""

    def __init__(self, db: Database):
        self.db = db
        self.tables = db.tables

    def add_post(
        self,
        title: str,
        content: str = "",
        post_type: str = "post",
        status: str = "publish",
    ) -> Post:
        """Insert a post.

        Returns:
            The stored Post with its assigned ID.
        """
        with self.db.transaction() as cursor:
            cursor.execute(
                f"INSERT INTO {self.tables.posts} "
                "(post_title, post_content, post_type, post_status) VALUES (?, ?, ?, ?)",
                (title, content, post_type, status),
            )
            post_id = cursor.lastrowid
        logger.debug(f"Added {post_type} {post_id}: {title!r}")
        return Post(id=post_id, title=title, content=content, post_type=post_type, status=status)

    def add_meta(self, post_id: int, key: str, value: str) -> None:
        with self.db.transaction() as cursor:
            cursor.execute(
                f"INSERT INTO {self.tables.postmeta} (post_id, meta_key, meta_value) "
                "VALUES (?, ?, ?)",
                (post_id, key, value),
            )

    def add_term(self, taxonomy: str, name: str, slug: str | None = None) -> int:
        """Create a term in a taxonomy.

        Returns:
            The term_taxonomy_id used to assign the term to posts.
        """
        with self.db.transaction() as cursor:
            cursor.execute(
                f"INSERT INTO {self.tables.terms} (name, slug) VALUES (?, ?)",
                (name, slug or slugify(name)),
            )
            term_id = cursor.lastrowid
            cursor.execute(
                f"INSERT INTO {self.tables.term_taxonomy} (term_id, taxonomy) VALUES (?, ?)",
                (term_id, taxonomy),
            )
            return cursor.lastrowid

    def assign_term(self, post_id: int, term_taxonomy_id: int) -> None:
        with self.db.transaction() as cursor:
            cursor.execute(
                f"INSERT OR IGNORE INTO {self.tables.term_relationships} "
                "(object_id, term_taxonomy_id) VALUES (?, ?)",
                (post_id, term_taxonomy_id),
            )

    def get(self, post_id: int) -> Post | None:
        row = self.db.execute(
            f"SELECT * FROM {self.tables.posts} WHERE ID = ?", (post_id,)
        ).fetchone()
        return row_to_post(row) if row else None


def row_to_post(row) -> Post:
    return Post(
        id=row["ID"],
        title=row["post_title"],
        content=row["post_content"],
        post_type=row["post_type"],
        status=row["post_status"],
    )
