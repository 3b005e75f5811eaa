"""Error types raised by the diet entry store and its collaborators."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for all errors surfaced to callers as plain messages."""


class ValidationError(TrackerError, ValueError):
    """Malformed input, e.g. an unknown meal type or a missing argument."""


class NotFoundError(TrackerError, LookupError):
    """A referenced diet entry or family member does not exist."""


class StorageError(TrackerError):
    """An SQLite failure, prefixed with the phase it happened in."""

    def __init__(self, phase: str, cause: BaseException) -> None:
        super().__init__(f"{phase}: {cause}")
        self.phase = phase
