"""Configuration management for advsearch."""

import os
import re
from dataclasses import dataclass, field

from .exceptions import ConfigurationError
from .types import TableNames

SQL_DIALECTS = ("mysql", "sqlite")

_PREFIX_RE = re.compile(r"^[A-Za-z0-9_]*$")


def _split_list(value: str) -> list[str]:
    """Split a comma separated environment value."""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ScopeConfig:
    """Defaults for what the search reaches into.

    Each list is only a default; the host can still override it at runtime
    through the searchable_* filters.
    """

    document_types: list[str] = field(default_factory=lambda: ["post", "page"])
    # Every key adds a non-indexed LIKE scan over postmeta, keep this short
    metadata_keys: list[str] = field(default_factory=list)
    excluded_taxonomies: tuple[str, ...] = ("post_format", "nav_menu", "link_category")


@dataclass
class Config:
    """Main application configuration."""

    table_prefix: str = "wp_"
    dialect: str = "mysql"
    gate_priority: int = 10
    scope: ScopeConfig = field(default_factory=ScopeConfig)

    @property
    def tables(self) -> TableNames:
        """Table names for the configured prefix."""
        return TableNames.from_prefix(self.table_prefix)

    def validate(self) -> "Config":
        """Check values that would otherwise produce broken SQL.

        Returns:
            The same config, for chaining.

        Raises:
            ConfigurationError: If the prefix or dialect is not usable.
        """
        if not _PREFIX_RE.match(self.table_prefix):
            raise ConfigurationError(
                f"Invalid table prefix {self.table_prefix!r}: "
                "only letters, digits and underscores are allowed"
            )
        if self.dialect not in SQL_DIALECTS:
            raise ConfigurationError(
                f"Unknown SQL dialect {self.dialect!r}, expected one of {SQL_DIALECTS}"
            )
        return self

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        if prefix := os.environ.get("ADVSEARCH_TABLE_PREFIX"):
            config.table_prefix = prefix

        if dialect := os.environ.get("ADVSEARCH_SQL_DIALECT"):
            config.dialect = dialect.lower()

        if post_types := os.environ.get("ADVSEARCH_POST_TYPES"):
            config.scope.document_types = _split_list(post_types)

        if meta_keys := os.environ.get("ADVSEARCH_META_KEYS"):
            config.scope.metadata_keys = _split_list(meta_keys)

        return config.validate()
