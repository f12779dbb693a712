"""Errors raised while saving a node edit."""

from __future__ import annotations


class EditError(Exception):
    """Base class for every failure of a save attempt."""


class InvalidDocumentError(EditError):
    def __init__(self, message: str = "Current JSON is invalid; cannot edit.") -> None:
        super().__init__(message)


class PathNotFoundError(EditError):
    """A path segment does not exist in the document."""

    def __init__(self, segment: str | int, position: int) -> None:
        super().__init__(
            f"Path not found in JSON: segment {segment!r} at position {position}"
        )
        self.segment = segment
        self.position = position


class NotAnObjectError(EditError):
    def __init__(self, path: tuple[str | int, ...]) -> None:
        super().__init__("Target is not an object")
        self.path = path


class CastError(EditError):
    """Draft text cannot be converted to the declared type."""

    def __init__(
        self, message: str, key: str | None = None, value: str | None = None
    ) -> None:
        super().__init__(message)
        self.key = key
        self.value = value
