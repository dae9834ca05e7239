"""
Errors raised while reading the factory status record.
"""


class StatusReadError(Exception):
    """Base error for anything that prevents a status response from being built."""
    pass


class StoreUnavailable(StatusReadError):
    """Store credentials are missing or the store could not be reached."""
    pass


class InvalidStatusRecord(StatusReadError):
    """The stored value is not a well-formed status record."""
    pass
