"""Port definitions for the host platform.

The gate and rewriter only talk to the host through these protocols, so they
can run against the reference store in `advsearch.store` or against plain
test doubles.

Protocols defined:
    - HostQuery: The query being prepared (query vars and flags)
    - RequestContext: Facts about the current request
    - HookPipeline: Filter and action registration
    - TaxonomySource: Lookup of taxonomies registered for post types
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol, runtime_checkable


@runtime_checkable
class HostQuery(Protocol):
    """A listing query the host is about to execute."""

    def get(self, name: str, default: Any = None) -> Any:
        """Read a query variable."""
        ...

    def set(self, name: str, value: Any) -> None:
        """Overwrite a query variable."""
        ...

    def is_main_query(self) -> bool:
        """True for the primary listing query of the request."""
        ...

    def is_search(self) -> bool:
        """True when the query carries a user search."""
        ...


@runtime_checkable
class RequestContext(Protocol):
    """Facts about the request the query belongs to."""

    def is_admin(self) -> bool:
        """True when the request is served by the administrative area."""
        ...


@runtime_checkable
class HookPipeline(Protocol):
    """Named filters and actions, as the host exposes them."""

    def add_filter(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None:
        ...

    def remove_filter(self, name: str, callback: Callable[..., Any], priority: int = 10) -> bool:
        ...

    def has_filter(self, name: str, callback: Callable[..., Any] | None = None) -> bool:
        ...

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        ...

    def add_action(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None:
        ...

    def remove_action(self, name: str, callback: Callable[..., Any], priority: int = 10) -> bool:
        ...


@runtime_checkable
class TaxonomySource(Protocol):
    """Registry of taxonomies and the post types they are attached to."""

    def object_taxonomies(self, document_types: Iterable[str]) -> Iterable[Any]:
        """Names of taxonomies registered for any of the given types.

        Entries are expected to be plain strings; callers skip anything else.
        """
        ...
