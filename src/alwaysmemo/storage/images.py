"""Image payloads stored verbatim under freshly generated identifiers."""

from __future__ import annotations

import asyncio
import logging
import math
import uuid
from dataclasses import dataclass

from alwaysmemo.storage.paths import ImageId, StoragePaths

logger = logging.getLogger(__name__)

MAX_IMAGE_WIDTH = 640
IMAGE_SCHEME = "memo-image"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize_dimensions(width: int, height: int) -> tuple[int, int]:
    """Clamp display width to MAX_IMAGE_WIDTH, keeping the aspect ratio.

    Non-positive input yields the (0, 0) sentinel instead of an error.
    """
    if width <= 0 or height <= 0:
        return 0, 0
    if width <= MAX_IMAGE_WIDTH:
        return width, height
    ratio = MAX_IMAGE_WIDTH / width
    return _round_half_up(width * ratio), _round_half_up(height * ratio)


def image_reference(image_id: ImageId | str) -> str:
    return f"{IMAGE_SCHEME}://{ImageId.parse(image_id).value}"


@dataclass(frozen=True)
class ImageAsset:
    """A stored image with its normalized display size."""

    id: str
    width: int
    height: int

    @property
    def src(self) -> str:
        return image_reference(self.id)

    def to_dict(self) -> dict:
        return {"id": self.id, "src": self.src, "width": self.width, "height": self.height}


class ImageStore:
    """Writes raster payloads to ``images/<id>.png``."""

    def __init__(self, paths: StoragePaths) -> None:
        self.paths = paths

    async def save_image(self, data: bytes, width: int, height: int) -> ImageAsset:
        """Store *data* unmodified under a new id.

        The bytes are never decoded; only the caller-reported dimensions are
        normalized. OSError on directory creation or write propagates.
        """
        return await asyncio.to_thread(self._save_sync, bytes(data), width, height)

    def _save_sync(self, data: bytes, width: int, height: int) -> ImageAsset:
        self.paths.ensure_dirs()

        image_id = ImageId.parse(str(uuid.uuid4()))
        self.paths.image_path(image_id).write_bytes(data)

        norm_w, norm_h = normalize_dimensions(width, height)
        logger.debug("Image %s stored (%d bytes, %dx%d)", image_id, len(data), norm_w, norm_h)
        return ImageAsset(id=image_id.value, width=norm_w, height=norm_h)
