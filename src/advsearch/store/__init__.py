"""Reference SQLite store and query executor for the platform tables."""

from .database import Database
from .posts import PostRepository
from .query import PostQuery, PostQueryExecutor, QueryFragments, Request
from .schema import get_schema

__all__ = [
    "Database",
    "PostQuery",
    "PostQueryExecutor",
    "PostRepository",
    "QueryFragments",
    "Request",
    "get_schema",
]
