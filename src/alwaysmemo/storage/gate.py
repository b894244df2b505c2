"""Validation in front of the image retrieval boundary.

Every identifier coming from outside goes through ``ImageId.parse`` before a
path exists for it. Rejections raise InvalidIdentifier (client error);
a valid id without a file raises ImageNotFound.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from urllib.parse import urlsplit

from alwaysmemo.storage.errors import ImageNotFound, InvalidIdentifier
from alwaysmemo.storage.images import IMAGE_SCHEME
from alwaysmemo.storage.paths import ImageId, StoragePaths

IMAGE_CONTENT_TYPE = "image/png"


@dataclass(frozen=True)
class ImageBlob:
    data: bytes
    content_type: str = IMAGE_CONTENT_TYPE


def image_id_from_locator(locator: str) -> ImageId:
    """Extract and validate the id from ``memo-image://<id>``.

    The authority segment carries the id; an empty authority falls back to
    the path with leading slashes removed.
    """
    try:
        parts = urlsplit(locator)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier(str(locator), "unparsable locator") from None

    if parts.scheme.lower() != IMAGE_SCHEME:
        raise InvalidIdentifier(locator, "unsupported scheme")

    raw = parts.netloc.lower() or parts.path.lstrip("/")
    if not raw:
        raise InvalidIdentifier(locator, "missing image id")
    return ImageId.parse(raw)


class AccessGate:
    """Serves stored image bytes for validated identifiers only."""

    def __init__(self, paths: StoragePaths) -> None:
        self._paths = paths

    async def fetch(self, locator: str) -> ImageBlob:
        return await self.fetch_id(image_id_from_locator(locator))

    async def fetch_id(self, raw_id: ImageId | str) -> ImageBlob:
        image_id = ImageId.parse(raw_id)
        path = self._paths.image_path(image_id)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            raise ImageNotFound(image_id.value) from None
        return ImageBlob(data=data)
