"""Custom exceptions for advsearch."""


class AdvSearchError(Exception):
    """Base exception for all advsearch errors."""

    pass


class ConfigurationError(AdvSearchError):
    """Configuration value is invalid."""

    pass


class HookError(AdvSearchError):
    """Hook registration failed."""

    def __init__(self, hook_name: str, reason: str):
        """Initialize exception with hook name and reason.

        Args:
            hook_name: Name of the filter or action.
            reason: Why the registration was rejected.
        """
        self.hook_name = hook_name
        super().__init__(f"Cannot register on '{hook_name}': {reason}")


class DatabaseError(AdvSearchError):
    """Database operation failed."""

    pass
