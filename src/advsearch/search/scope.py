"""Resolution of what a search covers: post types, meta keys, taxonomies.

Every list starts from a configured default and is passed through a named
filter so host code can override it:

    hooks.add_filter(names.SEARCHABLE_META_KEYS, lambda keys: [*keys, "sku"])
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from advsearch.core.config import Config
from advsearch.core.types import SearchContext, ordered_unique
from advsearch.hooks import names
from advsearch.search.ports import HookPipeline
from advsearch.search.taxonomy import TaxonomyDiscoverer


class SearchScopeResolver:
    """Resolve searchable post types, meta keys and taxonomy names."""

    def __init__(
        self,
        hooks: HookPipeline,
        discoverer: TaxonomyDiscoverer,
        config: Config | None = None,
    ):
        """Initialize the resolver.

        Args:
            hooks: Filter pipeline used for the override hooks.
            discoverer: Source of the default taxonomy list.
            config: Defaults; `Config()` if omitted.
        """
        self._hooks = hooks
        self._discoverer = discoverer
        self.config = config or Config()

    def searchable_document_types(self) -> tuple[str, ...]:
        default = list(self.config.scope.document_types)
        return self._resolve(names.SEARCHABLE_POST_TYPES, default)

    def searchable_metadata_keys(self) -> tuple[str, ...]:
        default = list(self.config.scope.metadata_keys)
        return self._resolve(names.SEARCHABLE_META_KEYS, default)

    def searchable_taxonomy_names(
        self, document_types: tuple[str, ...] | None = None
    ) -> tuple[str, ...]:
        if document_types is None:
            document_types = self.searchable_document_types()
        default = list(self._discoverer.discover(document_types))
        return self._resolve(names.SEARCHABLE_TAXONOMIES, default)

    def build_context(self, phrase: str | None) -> SearchContext:
        """Snapshot the resolved scope for one search phrase.

        Args:
            phrase: User's search phrase, kept as typed; anything that is
                not a string becomes "".

        Returns:
            Immutable SearchContext.
        """
        if not isinstance(phrase, str):
            phrase = ""
        document_types = self.searchable_document_types()
        context = SearchContext(
            phrase=phrase,
            document_types=document_types,
            metadata_keys=self.searchable_metadata_keys(),
            taxonomy_names=self.searchable_taxonomy_names(document_types),
        )
        logger.debug(
            f"Search context: types={context.document_types}, "
            f"meta_keys={context.metadata_keys}, taxonomies={context.taxonomy_names}"
        )
        return context

    def _resolve(self, filter_name: str, default: list[str]) -> tuple[str, ...]:
        value = self._hooks.apply_filters(filter_name, default)
        return _normalize(filter_name, value)


def _normalize(filter_name: str, value: Any) -> tuple[str, ...]:
    """Coerce a filter result into an ordered set of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    kept = []
    for item in value:
        if isinstance(item, str) and item:
            kept.append(item)
        else:
            logger.debug(f"Filter '{filter_name}' returned non-string entry {item!r}, dropped")
    return ordered_unique(kept)
