"""Always Memo application context — the operations the UI shell calls.

Responsibilities:
1. Own the storage paths derived from the configured data directory
2. Expose load/save memo, save image bytes and image retrieval
3. Shape responses the way the shell expects them
"""

from __future__ import annotations

import logging
from typing import Any

from alwaysmemo.config import MemoConfig
from alwaysmemo.storage.gate import AccessGate, ImageBlob
from alwaysmemo.storage.images import ImageStore
from alwaysmemo.storage.memo import MemoStore
from alwaysmemo.storage.paths import StoragePaths

logger = logging.getLogger(__name__)


class MemoApp:
    """Explicitly owned application context.

    Holds no window or session state; the storage core only needs the root
    path supplied by the config.
    """

    def __init__(self, config: MemoConfig) -> None:
        self.config = config
        self.paths = StoragePaths.from_root(config.data_dir)
        self.memo = MemoStore(self.paths)
        self.images = ImageStore(self.paths)
        self.gate = AccessGate(self.paths)

    async def load_memo(self) -> dict[str, Any]:
        return await self.memo.load()

    async def save_memo(self, doc: Any) -> dict[str, Any]:
        """Save *doc*; MemoStore queues concurrent callers."""
        updated_at = await self.memo.save(doc)
        return {"ok": True, "updatedAt": updated_at}

    async def save_image_bytes(self, data: bytes, width: int, height: int) -> dict[str, Any]:
        asset = await self.images.save_image(data, width, height)
        logger.info("Stored image %s (%dx%d)", asset.id, asset.width, asset.height)
        return asset.to_dict()

    async def retrieve_image(self, locator: str) -> ImageBlob:
        return await self.gate.fetch(locator)
