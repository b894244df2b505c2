"""Canonical on-disk locations derived from the storage root."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from alwaysmemo.storage.errors import InvalidIdentifier

MEMO_FILENAME = "memo.json"
IMAGES_DIRNAME = "images"
IMAGE_SUFFIX = ".png"

_IMAGE_ID_PATTERN = re.compile(r"[0-9a-fA-F-]+")


@dataclass(frozen=True)
class ImageId:
    """An identifier that has passed the token grammar check.

    Only ``ImageId.parse`` should build one; holding an ``ImageId`` means the
    value is safe to use as a filename stem.
    """

    value: str

    @classmethod
    def parse(cls, raw: object) -> ImageId:
        """Validate *raw* against the token grammar (hex digits and hyphens).

        Raises InvalidIdentifier for anything else, including the empty string.
        """
        if isinstance(raw, ImageId):
            return raw
        if not isinstance(raw, str) or not _IMAGE_ID_PATTERN.fullmatch(raw):
            raise InvalidIdentifier(str(raw))
        return cls(raw)

    def __str__(self) -> str:
        return self.value


def is_valid_image_id(raw: object) -> bool:
    try:
        ImageId.parse(raw)
    except InvalidIdentifier:
        return False
    return True


@dataclass(frozen=True)
class StoragePaths:
    """Document file and image directory for one storage root."""

    memo_file: Path
    images_dir: Path

    @classmethod
    def from_root(cls, root: Path | str) -> StoragePaths:
        root = Path(root)
        return cls(memo_file=root / MEMO_FILENAME, images_dir=root / IMAGES_DIRNAME)

    @property
    def root(self) -> Path:
        return self.memo_file.parent

    @property
    def temp_file(self) -> Path:
        return self.memo_file.with_name(self.memo_file.name + ".tmp")

    def quarantine_file(self, stamp_ms: int) -> Path:
        return self.memo_file.with_name(f"{self.memo_file.name}.corrupt-{stamp_ms}")

    def image_path(self, image_id: ImageId | str) -> Path:
        """Return the file for *image_id*.

        The identifier is validated before any path is built, so a rejected
        value never reaches the filesystem.
        """
        parsed = ImageId.parse(image_id)
        return self.images_dir / f"{parsed.value}{IMAGE_SUFFIX}"

    def ensure_dirs(self) -> None:
        """Create the root and image directories. Idempotent."""
        self.memo_file.parent.mkdir(parents=True, exist_ok=True)
        self.images_dir.mkdir(parents=True, exist_ok=True)
