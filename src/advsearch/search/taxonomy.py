"""Taxonomy discovery for searchable post types."""

from __future__ import annotations

from typing import Any, Iterable

from loguru import logger

from advsearch.search.ports import TaxonomySource

# Structural taxonomies whose term names are not content
EXCLUDED_TAXONOMIES: tuple[str, ...] = ("post_format", "nav_menu", "link_category")


class TaxonomyRegistry:
    """In-memory taxonomy registry keyed by taxonomy name.

    Mirrors how the host registers taxonomies against object (post) types.
    Registration order is preserved and is the order discovery reports.

    Example:
        >>> registry = TaxonomyRegistry()
        >>> registry.register("category", ["post"])
        >>> registry.register("product_cat", ["product"])
        >>> list(registry.object_taxonomies(["post"]))
        ['category']
    """

    def __init__(self) -> None:
        self._taxonomies: dict[str, list[str]] = {}

    def register(self, name: str, object_types: Iterable[str]) -> None:
        """Register a taxonomy, or attach more object types to an existing one."""
        types = self._taxonomies.setdefault(name, [])
        for object_type in object_types:
            if object_type not in types:
                types.append(object_type)

    def unregister(self, name: str) -> bool:
        return self._taxonomies.pop(name, None) is not None

    def object_types(self, name: str) -> list[str]:
        return list(self._taxonomies.get(name, []))

    def object_taxonomies(self, document_types: Iterable[str]) -> list[str]:
        wanted = set(document_types)
        return [
            name
            for name, types in self._taxonomies.items()
            if wanted.intersection(types)
        ]


class TaxonomyDiscoverer:
    """Derive the default searchable taxonomy list for a set of post types."""

    def __init__(
        self,
        source: TaxonomySource,
        excluded: Iterable[str] = EXCLUDED_TAXONOMIES,
    ):
        """Initialize with a taxonomy source.

        Args:
            source: Where taxonomies registered for post types come from.
            excluded: Taxonomy names that are never searched.
        """
        self._source = source
        self._excluded = frozenset(excluded)

    def discover(self, document_types: Iterable[str]) -> tuple[str, ...]:
        """Return searchable taxonomies for the given post types.

        Drops the excluded set and any entry that is not a string, keeping
        the order the source reported.
        """
        discovered: list[str] = []
        for entry in self._source.object_taxonomies(tuple(document_types)):
            if not _is_taxonomy_name(entry):
                logger.debug(f"Skipping malformed taxonomy entry: {entry!r}")
                continue
            if entry in self._excluded or entry in discovered:
                continue
            discovered.append(entry)
        return tuple(discovered)


def _is_taxonomy_name(entry: Any) -> bool:
    return isinstance(entry, str) and bool(entry)
