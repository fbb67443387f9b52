"""
Exception types raised by the dispatch core.

Empty queues and empty search results are NOT errors and never raise.
"""


class DispatchError(Exception):
    """Base class for dispatch hub errors."""


class InvalidPriorityError(DispatchError, ValueError):
    """Raised when a priority outside {0, 1} reaches the core."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid priority: {value!r}. Please enter 0 (normal) or 1 (high).")


class StateStoreError(DispatchError):
    """
    Raised when the state snapshot cannot be written or read back.

    `reason` is a human-readable message suitable for showing to the operator.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
