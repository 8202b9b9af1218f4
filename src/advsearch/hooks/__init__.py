"""Filter/action registry and the hook names advsearch uses."""

from . import names
from .registry import DEFAULT_PRIORITY, BoundFilters, HookRegistry

__all__ = ["BoundFilters", "DEFAULT_PRIORITY", "HookRegistry", "names"]
