"""In-process filter and action registry.

Models the host platform's hook system: named filters transform a value
through every registered callback, named actions notify callbacks without
a return value. Callbacks run in ascending priority order, then in
registration order within a priority.

Example:
    >>> hooks = HookRegistry()
    >>> hooks.add_filter("advsearch_searchable_meta_keys", lambda keys: [*keys, "sku"])
    >>> hooks.apply_filters("advsearch_searchable_meta_keys", [])
    ['sku']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger

from advsearch.core.exceptions import HookError

DEFAULT_PRIORITY = 10

Callback = Callable[..., Any]


@dataclass
class _Hook:
    """Callbacks registered under one hook name, keyed by priority."""

    callbacks: dict[int, list[Callback]] = field(default_factory=dict)

    def add(self, callback: Callback, priority: int) -> None:
        self.callbacks.setdefault(priority, []).append(callback)

    def remove(self, callback: Callback, priority: int) -> bool:
        bucket = self.callbacks.get(priority)
        if not bucket:
            return False
        for i, registered in enumerate(bucket):
            # Bound methods are recreated on attribute access, so compare by equality
            if registered == callback:
                del bucket[i]
                if not bucket:
                    del self.callbacks[priority]
                return True
        return False

    def snapshot(self) -> list[Callback]:
        return [cb for priority in sorted(self.callbacks) for cb in self.callbacks[priority]]

    def __contains__(self, callback: Callback) -> bool:
        return any(callback == cb for bucket in self.callbacks.values() for cb in bucket)

    def __bool__(self) -> bool:
        return bool(self.callbacks)


class HookRegistry:
    """Registry of named filters and actions."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._filters: dict[str, _Hook] = {}
        self._actions: dict[str, _Hook] = {}

    # Filters

    def add_filter(
        self,
        name: str,
        callback: Callback,
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register a callback on a filter.

        Raises:
            HookError: If the callback is not callable.
        """
        if not callable(callback):
            raise HookError(name, f"{callback!r} is not callable")
        self._filters.setdefault(name, _Hook()).add(callback, priority)

    def remove_filter(
        self,
        name: str,
        callback: Callback,
        priority: int = DEFAULT_PRIORITY,
    ) -> bool:
        """Unregister a callback from a filter.

        Removing a callback that is not registered is a no-op.

        Returns:
            True if a registration was removed.
        """
        hook = self._filters.get(name)
        if hook is None:
            return False
        removed = hook.remove(callback, priority)
        if not hook:
            del self._filters[name]
        return removed

    def has_filter(self, name: str, callback: Callback | None = None) -> bool:
        """Check whether a filter has callbacks (or a specific callback)."""
        hook = self._filters.get(name)
        if hook is None:
            return False
        if callback is None:
            return bool(hook)
        return callback in hook

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Pass a value through every callback on a filter.

        Callbacks may remove themselves while the filter is running; the
        current pass still uses the callbacks registered when it started.
        """
        hook = self._filters.get(name)
        if hook is None:
            return value
        for callback in hook.snapshot():
            value = callback(value, *args)
        return value

    def bind_filters(self, *names: str) -> "BoundFilters":
        """Capture the current callbacks of several filters.

        The host binds the filters of one query when it starts building it,
        so a callback that unregisters itself part way through still runs for
        the rest of that query and for no later one.
        """
        return BoundFilters(
            {name: self._filters[name].snapshot() for name in names if name in self._filters}
        )

    # Actions

    def add_action(
        self,
        name: str,
        callback: Callback,
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register a callback on an action.

        Raises:
            HookError: If the callback is not callable.
        """
        if not callable(callback):
            raise HookError(name, f"{callback!r} is not callable")
        self._actions.setdefault(name, _Hook()).add(callback, priority)

    def remove_action(
        self,
        name: str,
        callback: Callback,
        priority: int = DEFAULT_PRIORITY,
    ) -> bool:
        """Unregister a callback from an action."""
        hook = self._actions.get(name)
        if hook is None:
            return False
        removed = hook.remove(callback, priority)
        if not hook:
            del self._actions[name]
        return removed

    def has_action(self, name: str, callback: Callback | None = None) -> bool:
        """Check whether an action has callbacks (or a specific callback)."""
        hook = self._actions.get(name)
        if hook is None:
            return False
        if callback is None:
            return bool(hook)
        return callback in hook

    def do_action(self, name: str, *args: Any) -> None:
        """Call every callback on an action."""
        hook = self._actions.get(name)
        if hook is None:
            return
        callbacks = hook.snapshot()
        logger.debug(f"Action '{name}': {len(callbacks)} callbacks")
        for callback in callbacks:
            callback(*args)


class BoundFilters:
    """Filter chains captured by `HookRegistry.bind_filters`."""

    def __init__(self, chains: dict[str, list[Callback]]):
        self._chains = chains

    def __contains__(self, name: str) -> bool:
        return name in self._chains

    def apply(self, name: str, value: Any, *args: Any) -> Any:
        """Pass a value through the captured callbacks of one filter."""
        for callback in self._chains.get(name, ()):
            value = callback(value, *args)
        return value
