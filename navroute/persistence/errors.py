"""Persistence-specific exceptions."""


class PersistenceError(Exception):
    """Base exception for all persistence errors."""


class NavDataNotReadyError(PersistenceError):
    """Raised when the navigation reference database has not been loaded."""


class NavDataFormatError(PersistenceError):
    """Raised when a reference data export cannot be parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")
