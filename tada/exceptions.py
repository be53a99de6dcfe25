from __future__ import annotations


class TadaError(Exception):
    """Base class for errors reported to the user by the command line."""


class ListError(TadaError):
    """A todo list could not be read or written."""


class ConfigError(TadaError):
    """The location of a todo list could not be determined."""


class InvalidSortOrder(TadaError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown sort order '{name}'.")
        self.name = name
