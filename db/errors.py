"""
db/errors.py
------------
Exceptions raised by the database layer.
"""


class ProviderError(Exception):
    """Raised when a connection provider cannot hand out a connection."""


class DataAccessError(Exception):
    """
    The single error surfaced by the data-access layer.

    Wraps any driver or provider failure; the original exception is kept
    as ``__cause__``.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
