"""Errors raised by the commit log."""


class InvalidArgumentError(ValueError):
    """Raised when an operation receives an argument it cannot accept.

    Validation always happens before any state change, so a log is never
    left partially modified when this is raised.
    """
