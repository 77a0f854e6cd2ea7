"""
utils/errors.py
---------------
Exceptions raised by the core when a failure must reach the caller.
"""


class SubsBotError(Exception):
    """Base class for all SubsBot errors."""


class PersistedStateError(SubsBotError):
    """
    Raised when the stored subscription list cannot be decoded.

    Loading fails closed: the caller gets this error instead of an empty
    list, so no user data is overwritten by the next save.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Malformed persisted state under key '{key}': {reason}")
