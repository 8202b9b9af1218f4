"""Reference host query: query vars, request flags and the SQL executor.

`PostQueryExecutor.get_posts` follows the host's query lifecycle:

1. fire the query preparation action (`pre_get_posts`)
2. build JOIN, WHERE and DISTINCT fragments, including the default
   title/content search clause
3. pass them through the `posts_join`, `posts_where` and `posts_distinct`
   filters, in that order
4. assemble and execute the SELECT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from advsearch.core.types import Post
from advsearch.hooks import HookRegistry, names
from advsearch.search.predicates import in_list, like, like_literal
from advsearch.store.database import Database
from advsearch.store.posts import row_to_post


@dataclass
class Request:
    """The request a query runs in."""

    admin: bool = False

    def is_admin(self) -> bool:
        return self.admin


@dataclass
class PostQuery:
    """A listing query described by its query vars.

    Attributes:
        query_vars: Query variables; "s" holds the search phrase and
            "post_type" a type or list of types.
        main: Whether this is the request's main query.
    """

    query_vars: dict[str, Any] = field(default_factory=dict)
    main: bool = True

    def get(self, name: str, default: Any = None) -> Any:
        return self.query_vars.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self.query_vars[name] = value

    def is_main_query(self) -> bool:
        return self.main

    def is_search(self) -> bool:
        return bool(self.search_phrase)

    @property
    def search_phrase(self) -> str:
        phrase = self.get("s", "")
        return phrase.strip() if isinstance(phrase, str) else ""

    @property
    def post_types(self) -> list[str]:
        post_type = self.get("post_type") or "post"
        if isinstance(post_type, str):
            return [post_type]
        return list(post_type)


@dataclass
class QueryFragments:
    """Fragments of a SELECT being assembled."""

    join: str = ""
    where: str = ""
    distinct: str = ""


class PostQueryExecutor:
    """Run a PostQuery against the database through the hook pipeline."""

    def __init__(self, db: Database, hooks: HookRegistry, dialect: str = "sqlite"):
        """Initialize the executor.

        Args:
            db: Database holding the platform tables.
            hooks: Registry whose filters see every fragment.
            dialect: Dialect used to render the default search clause.
        """
        self.db = db
        self.hooks = hooks
        self.dialect = dialect
        self.tables = db.tables

    def default_fragments(self, query: PostQuery) -> QueryFragments:
        """Fragments before any filter has run."""
        posts = self.tables.posts
        where = (
            f" AND {posts}.post_type IN ({in_list(query.post_types, self.dialect)})"
            f" AND {posts}.post_status = 'publish'"
        )
        if query.is_search():
            literal = like_literal(query.search_phrase, self.dialect)
            title = like(f"{posts}.post_title", literal, self.dialect)
            content = like(f"{posts}.post_content", literal, self.dialect)
            where += f" AND (({title}) OR ({content}))"
        return QueryFragments(where=where)

    def build_sql(self, query: PostQuery) -> str:
        """Apply the fragment filters and assemble the SELECT.

        The three filters are bound before the first one runs, so callbacks
        registered for this query finish it even if an earlier stage
        unregisters them. Does not fire the preparation action; see
        `get_posts`.
        """
        fragments = self.default_fragments(query)
        filters = self.hooks.bind_filters(
            names.POSTS_JOIN, names.POSTS_WHERE, names.POSTS_DISTINCT
        )
        join = filters.apply(names.POSTS_JOIN, fragments.join)
        where = filters.apply(names.POSTS_WHERE, fragments.where)
        distinct = filters.apply(names.POSTS_DISTINCT, fragments.distinct)

        posts = self.tables.posts
        return (
            f"SELECT {distinct} {posts}.* FROM {posts}{join}"
            f" WHERE 1=1{where} ORDER BY {posts}.ID ASC"
        )

    def get_posts(self, query: PostQuery) -> list[Post]:
        """Prepare, build and execute a query."""
        self.hooks.do_action(names.PRE_GET_POSTS, query)
        sql = self.build_sql(query)
        logger.debug(f"Executing: {sql}")
        rows = self.db.execute(sql).fetchall()
        return [row_to_post(row) for row in rows]
