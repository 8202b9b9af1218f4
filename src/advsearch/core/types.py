"""Type definitions for advsearch."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


def ordered_unique(values: Iterable[str]) -> tuple[str, ...]:
    """Drop duplicates while keeping first-seen order."""
    return tuple(dict.fromkeys(values))


class PredicateKind(Enum):
    """Data plane a search predicate tests."""

    BODY = "body"
    META = "meta"
    TAXONOMY = "taxonomy"


@dataclass(frozen=True)
class Predicate:
    """A boolean SQL sub-expression produced for one data plane."""

    kind: PredicateKind
    sql: str

    def __str__(self) -> str:
        return self.sql


@dataclass(frozen=True)
class SearchContext:
    """Everything the rewriter needs for a single search query.

    Attributes:
        phrase: Raw search phrase (may be empty).
        document_types: Post types the query is narrowed to.
        metadata_keys: Meta keys whose values are searched.
        taxonomy_names: Taxonomies whose term names are searched.
    """

    phrase: str
    document_types: tuple[str, ...] = ()
    metadata_keys: tuple[str, ...] = ()
    taxonomy_names: tuple[str, ...] = ()

    @property
    def has_phrase(self) -> bool:
        return bool(self.phrase)

    @property
    def searches_metadata(self) -> bool:
        return bool(self.metadata_keys)

    @property
    def searches_taxonomies(self) -> bool:
        return bool(self.taxonomy_names)


@dataclass(frozen=True)
class TableNames:
    """Physical table names for one table prefix."""

    posts: str
    postmeta: str
    term_relationships: str
    term_taxonomy: str
    terms: str

    @classmethod
    def from_prefix(cls, prefix: str = "wp_") -> "TableNames":
        """Build table names the way the platform prefixes them."""
        return cls(
            posts=f"{prefix}posts",
            postmeta=f"{prefix}postmeta",
            term_relationships=f"{prefix}term_relationships",
            term_taxonomy=f"{prefix}term_taxonomy",
            terms=f"{prefix}terms",
        )


@dataclass
class Post:
    """A row from the posts table."""

    id: int
    title: str
    content: str
    post_type: str = "post"
    status: str = "publish"
