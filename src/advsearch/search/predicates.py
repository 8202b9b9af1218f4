"""Pure builders for the expanded search predicate.

Nothing here touches the host: every function maps a phrase, a scope and
table names to SQL text, so the combination logic can be checked without a
query in flight.

The combined predicate has the shape:

    (posts.post_title LIKE '%x%' OR posts.post_content LIKE '%x%')
    OR (advs_pm.meta_value LIKE '%x%' AND advs_pm.meta_key IN (...))
    OR (advs_t.name LIKE '%x%' AND advs_tt.taxonomy IN (...))

with the meta and taxonomy parts present only when their scope is non-empty.
"""

from __future__ import annotations

from typing import Iterable

from advsearch.core.types import Predicate, PredicateKind, SearchContext, TableNames

# Join aliases, prefixed so they cannot clash with host or plugin aliases
META_ALIAS = "advs_pm"
TERM_RELATIONSHIPS_ALIAS = "advs_tr"
TERM_TAXONOMY_ALIAS = "advs_tt"
TERMS_ALIAS = "advs_t"

LIKE_ESCAPE_CHAR = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the phrase matches literally."""
    return (
        text.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


def quote_literal(text: str, dialect: str = "mysql") -> str:
    """Render text as a single-quoted SQL string literal.

    MySQL also reads backslash as a string escape, so it is doubled there.
    """
    if dialect == "mysql":
        text = text.replace("\\", "\\\\")
    return "'" + text.replace("'", "''") + "'"


def like_literal(phrase: str, dialect: str = "mysql") -> str:
    """Quoted `%phrase%` containment pattern."""
    return quote_literal("%" + escape_like(phrase) + "%", dialect)


def in_list(values: Iterable[str], dialect: str = "mysql") -> str:
    return ", ".join(quote_literal(value, dialect) for value in values)


def like(column: str, literal: str, dialect: str = "mysql") -> str:
    """`column LIKE literal`, with an explicit escape clause where needed.

    MySQL treats backslash as the LIKE escape by default; SQLite has no
    default escape character.
    """
    if dialect == "sqlite":
        return f"{column} LIKE {literal} ESCAPE '{LIKE_ESCAPE_CHAR}'"
    return f"{column} LIKE {literal}"


def body_predicate(literal: str, tables: TableNames, dialect: str = "mysql") -> Predicate:
    title = like(f"{tables.posts}.post_title", literal, dialect)
    content = like(f"{tables.posts}.post_content", literal, dialect)
    return Predicate(PredicateKind.BODY, f"({title} OR {content})")


def meta_predicate(
    literal: str,
    metadata_keys: Iterable[str],
    dialect: str = "mysql",
) -> Predicate:
    value = like(f"{META_ALIAS}.meta_value", literal, dialect)
    return Predicate(
        PredicateKind.META,
        f"({value} AND {META_ALIAS}.meta_key IN ({in_list(metadata_keys, dialect)}))",
    )


def taxonomy_predicate(
    literal: str,
    taxonomy_names: Iterable[str],
    dialect: str = "mysql",
) -> Predicate:
    name = like(f"{TERMS_ALIAS}.name", literal, dialect)
    return Predicate(
        PredicateKind.TAXONOMY,
        f"({name} AND {TERM_TAXONOMY_ALIAS}.taxonomy IN ({in_list(taxonomy_names, dialect)}))",
    )


def build_predicates(
    context: SearchContext,
    tables: TableNames,
    dialect: str = "mysql",
) -> list[Predicate]:
    """Build the predicates for a context, body first.

    The phrase is escaped and quoted once; every predicate embeds that same
    literal.
    """
    literal = like_literal(context.phrase, dialect)
    predicates = [body_predicate(literal, tables, dialect)]
    if context.searches_metadata:
        predicates.append(meta_predicate(literal, context.metadata_keys, dialect))
    if context.searches_taxonomies:
        predicates.append(taxonomy_predicate(literal, context.taxonomy_names, dialect))
    return predicates


def combine_predicates(predicates: Iterable[Predicate]) -> str:
    """OR the predicates together in the order given."""
    return " OR ".join(p.sql for p in predicates)


def build_search_predicate(
    context: SearchContext,
    tables: TableNames,
    dialect: str = "mysql",
) -> str:
    return combine_predicates(build_predicates(context, tables, dialect))
