"""Search scope resolution and query rewriting."""

from .clause import default_search_pattern, replace_default_search_clause
from .gate import QueryScopeGate, RegistrationHandle
from .predicates import (
    META_ALIAS,
    TERM_RELATIONSHIPS_ALIAS,
    TERM_TAXONOMY_ALIAS,
    TERMS_ALIAS,
    build_predicates,
    build_search_predicate,
    combine_predicates,
    escape_like,
    like_literal,
    quote_literal,
)
from .rewriter import DISTINCT, PredicateRewriter
from .scope import SearchScopeResolver
from .taxonomy import EXCLUDED_TAXONOMIES, TaxonomyDiscoverer, TaxonomyRegistry

__all__ = [
    "DISTINCT",
    "EXCLUDED_TAXONOMIES",
    "META_ALIAS",
    "TERM_RELATIONSHIPS_ALIAS",
    "TERM_TAXONOMY_ALIAS",
    "TERMS_ALIAS",
    "PredicateRewriter",
    "QueryScopeGate",
    "RegistrationHandle",
    "SearchScopeResolver",
    "TaxonomyDiscoverer",
    "TaxonomyRegistry",
    "build_predicates",
    "build_search_predicate",
    "combine_predicates",
    "default_search_pattern",
    "escape_like",
    "like_literal",
    "quote_literal",
    "replace_default_search_clause",
]
