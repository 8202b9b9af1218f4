"""Three-stage rewrite of a search query's JOIN, WHERE and DISTINCT fragments.

The host calls the stages in a fixed order for one query execution:

    join     = rewriter.extend_join(join)
    where    = rewriter.extend_where(where)      # releases the registration
    distinct = rewriter.force_distinct(distinct)

`PredicateRewriter.run` drives the same sequence directly, which is how the
stages are exercised without a host.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from loguru import logger

from advsearch.core.types import SearchContext, TableNames
from advsearch.hooks import names
from advsearch.search.clause import replace_default_search_clause
from advsearch.search.predicates import (
    META_ALIAS,
    TERM_RELATIONSHIPS_ALIAS,
    TERM_TAXONOMY_ALIAS,
    TERMS_ALIAS,
    build_search_predicate,
)

if TYPE_CHECKING:
    from advsearch.search.gate import RegistrationHandle

DISTINCT = "DISTINCT"

Stage = Callable[[str], str]


class PredicateRewriter:
    """Expand the default title/content search to post meta and taxonomy terms.

    Example:
        >>> context = SearchContext("mouse", ("post",), ("sku",), ())
        >>> rewriter = PredicateRewriter(context, TableNames.from_prefix("wp_"))
        >>> join, where, distinct = rewriter.run("", where, "")
    """

    def __init__(
        self,
        context: SearchContext,
        tables: TableNames,
        dialect: str = "mysql",
        handle: "RegistrationHandle | None" = None,
    ):
        """Initialize the rewriter.

        Args:
            context: Scope and phrase for the query being rewritten.
            tables: Physical table names.
            dialect: SQL dialect used to render LIKE.
            handle: Registration released by the WHERE stage, if any.
        """
        self.context = context
        self.tables = tables
        self.dialect = dialect
        self.handle = handle

    def stages(self) -> dict[str, Stage]:
        """Host filter name to stage callable, in execution order."""
        return {
            names.POSTS_JOIN: self.extend_join,
            names.POSTS_WHERE: self.extend_where,
            names.POSTS_DISTINCT: self.force_distinct,
        }

    def callbacks(self) -> dict[str, Stage]:
        """Same mapping as `stages`, keyed for registering with the host."""
        return self.stages()

    def run(self, join: str, where: str, distinct: str) -> tuple[str, str, str]:
        """Run JOIN, WHERE and DISTINCT stages in order."""
        join = self.extend_join(join)
        where = self.extend_where(where)
        distinct = self.force_distinct(distinct)
        return join, where, distinct

    def extend_join(self, join: str) -> str:
        """Append the postmeta and taxonomy joins the scope needs."""
        t = self.tables
        if self.context.searches_metadata:
            join += (
                f" LEFT JOIN {t.postmeta} AS {META_ALIAS}"
                f" ON {t.posts}.ID = {META_ALIAS}.post_id"
            )
        if self.context.searches_taxonomies:
            join += (
                f" LEFT JOIN {t.term_relationships} AS {TERM_RELATIONSHIPS_ALIAS}"
                f" ON {t.posts}.ID = {TERM_RELATIONSHIPS_ALIAS}.object_id"
                f" LEFT JOIN {t.term_taxonomy} AS {TERM_TAXONOMY_ALIAS}"
                f" ON {TERM_RELATIONSHIPS_ALIAS}.term_taxonomy_id"
                f" = {TERM_TAXONOMY_ALIAS}.term_taxonomy_id"
                f" LEFT JOIN {t.terms} AS {TERMS_ALIAS}"
                f" ON {TERM_TAXONOMY_ALIAS}.term_id = {TERMS_ALIAS}.term_id"
            )
        return join

    def extend_where(self, where: str) -> str:
        """Swap the default search clause for the expanded predicate.

        Releases the registration on every path, including the empty-phrase
        and no-match paths.
        """
        try:
            if not self.context.has_phrase:
                logger.debug("No search phrase, WHERE left unchanged")
                return where

            predicate = build_search_predicate(self.context, self.tables, self.dialect)
            new_where, replaced = replace_default_search_clause(
                where, self.tables.posts, predicate
            )
            if not replaced:
                logger.debug("Default search clause not found in WHERE, left unchanged")
            return new_where
        finally:
            if self.handle is not None:
                self.handle.release()

    def force_distinct(self, distinct: str) -> str:
        """Always select DISTINCT; the meta and term joins fan rows out."""
        return DISTINCT
