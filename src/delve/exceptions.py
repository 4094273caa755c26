class DelveError(Exception):
    """Base exception for the delve project."""


class InvariantViolation(DelveError):
    """Raised when a caller breaks a simulation invariant.

    These signal programming errors (borrowing the same entity twice, indexing
    past the live entity range) and are never meant to be caught by game code.
    """


class ConfigError(DelveError):
    """Raised when settings cannot describe a playable level."""
