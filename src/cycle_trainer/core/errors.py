"""Exception and warning types raised by the scheduling engine."""


class InvalidConfig(ValueError):
    """
    Raised when a cycle length or rest-day count is out of range.

    Engine functions raise this in place of returning a failure result.
    """

    pass


class ScheduleInvariantError(AssertionError):
    """
    Raised when a schedule that reached the engine breaks the rest rule.

    validate_assignment() exists to keep such days out of storage, so
    hitting this means a caller skipped validation.
    """

    pass


class MalformedSessionWarning(UserWarning):
    """Emitted when a session's completion timestamp cannot be parsed."""

    pass
