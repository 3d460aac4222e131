"""Exceptions raised by boolsearch."""


class BoolSearchError(Exception):
    """Base class for boolsearch errors."""


class DataSourceError(BoolSearchError):
    """A data source could not be read."""

    def __init__(self, path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")
