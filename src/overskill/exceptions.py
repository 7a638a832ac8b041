"""Exception hierarchy for overskill."""


class OverskillError(Exception):
    """Base exception for all overskill errors."""


class BudgetConfigurationError(OverskillError, ValueError):
    """Raised when a cache budget is constructed with impossible limits."""


class TrackerError(OverskillError):
    """Raised when a stability tracker backend cannot be created or used."""


class ContextRenderError(OverskillError):
    """Raised by a context fragment renderer that cannot format its value.

    Never escapes the renderer; the offending section is omitted instead.
    """
