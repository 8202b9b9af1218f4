"""Query-scope gate: decides which queries get rewritten.

Only the main listing query of a front-end search request is rewritten. For
that query the gate narrows the post types and attaches a one-shot
`PredicateRewriter` through a `RegistrationHandle`; the rewriter's WHERE
stage releases the handle, so later queries on the same request run
untouched.
"""

from __future__ import annotations

from typing import Callable

from loguru import logger

from advsearch.core.config import Config
from advsearch.hooks import names
from advsearch.search.ports import HookPipeline, HostQuery, RequestContext
from advsearch.search.rewriter import PredicateRewriter
from advsearch.search.scope import SearchScopeResolver


class RegistrationHandle:
    """Attachment of a set of filter callbacks, released at most once."""

    def __init__(
        self,
        hooks: HookPipeline,
        callbacks: dict[str, Callable[[str], str]] | None = None,
    ):
        self._hooks = hooks
        self.callbacks: dict[str, Callable[[str], str]] = dict(callbacks or {})
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def attach(self) -> None:
        """Register every callback with the filter pipeline."""
        if self._active:
            return
        for name, callback in self.callbacks.items():
            self._hooks.add_filter(name, callback)
        self._active = True

    def release(self) -> None:
        """Remove every callback. Safe to call repeatedly."""
        for name, callback in self.callbacks.items():
            self._hooks.remove_filter(name, callback)
        if self._active:
            logger.debug("Search rewrite filters released")
        self._active = False


class QueryScopeGate:
    """Attach the search rewriter to in-scope queries only."""

    def __init__(
        self,
        hooks: HookPipeline,
        resolver: SearchScopeResolver,
        request: RequestContext,
        config: Config | None = None,
    ):
        """Initialize the gate.

        Args:
            hooks: Host filter/action registry.
            resolver: Resolves the search scope for each query.
            request: Current request (admin or front end).
            config: Table prefix, dialect and hook priority.
        """
        self._hooks = hooks
        self._resolver = resolver
        self._request = request
        self.config = config or resolver.config
        self._handle: RegistrationHandle | None = None

    @property
    def active_handle(self) -> RegistrationHandle | None:
        """Current registration, or None once released."""
        if self._handle is not None and self._handle.active:
            return self._handle
        return None

    def install(self) -> None:
        """Subscribe to the host's query preparation action."""
        self._hooks.add_action(
            names.PRE_GET_POSTS, self.on_query_prepare, self.config.gate_priority
        )

    def uninstall(self) -> None:
        """Unsubscribe and drop any pending registration."""
        self._hooks.remove_action(
            names.PRE_GET_POSTS, self.on_query_prepare, self.config.gate_priority
        )
        if self._handle is not None:
            self._handle.release()
            self._handle = None

    def is_in_scope(self, query: HostQuery) -> bool:
        """Front end, main query, and a search."""
        return (
            not self._request.is_admin()
            and query.is_main_query()
            and query.is_search()
        )

    def on_query_prepare(self, query: HostQuery) -> RegistrationHandle | None:
        """Narrow and rewrite the query if it is in scope.

        Returns:
            The new registration, or None if the query is out of scope.
        """
        if not self.is_in_scope(query):
            logger.debug("Query out of search scope, not rewriting")
            return None

        if self._handle is not None:
            self._handle.release()

        context = self._resolver.build_context(query.get("s", ""))
        query.set("post_type", list(context.document_types))

        handle = RegistrationHandle(self._hooks)
        rewriter = PredicateRewriter(
            context,
            self.config.tables,
            dialect=self.config.dialect,
            handle=handle,
        )
        handle.callbacks = rewriter.stages()
        handle.attach()
        self._handle = handle

        logger.debug(f"Search rewrite attached for phrase {context.phrase!r}")
        return handle
