"""Exceptions raised by the storage core."""

from __future__ import annotations


class StorageError(Exception):
    """Base class for storage failures that are not plain OS errors."""


class InvalidIdentifier(StorageError, ValueError):
    """An image identifier or locator is not a legitimate reference."""

    def __init__(self, value: str, reason: str = "invalid image id") -> None:
        super().__init__(f"{reason}: {value!r}")
        self.value = value
        self.reason = reason


class ImageNotFound(StorageError, LookupError):
    """A well-formed image identifier has no stored file."""

    def __init__(self, image_id: str) -> None:
        super().__init__(f"image not found: {image_id}")
        self.image_id = image_id
