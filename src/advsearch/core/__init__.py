"""Core types, configuration and errors for advsearch."""

from .config import SQL_DIALECTS, Config, ScopeConfig
from .exceptions import AdvSearchError, ConfigurationError, DatabaseError, HookError
from .types import (
    Post,
    Predicate,
    PredicateKind,
    SearchContext,
    TableNames,
    ordered_unique,
)

__all__ = [
    "Config",
    "ScopeConfig",
    "SQL_DIALECTS",
    "AdvSearchError",
    "ConfigurationError",
    "DatabaseError",
    "HookError",
    "Post",
    "Predicate",
    "PredicateKind",
    "SearchContext",
    "TableNames",
    "ordered_unique",
]
