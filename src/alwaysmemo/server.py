"""aiohttp surface that serves stored images back to the rendering view.

Routes:
- GET /memo-image/{image_id}   bytes for one image id
- GET /resolve?src=<locator>   bytes for a ``memo-image://<id>`` locator
- GET /health                  liveness probe
"""

from __future__ import annotations

import asyncio
import logging

from aiohttp import web

from alwaysmemo.storage.errors import ImageNotFound, InvalidIdentifier
from alwaysmemo.storage.gate import AccessGate, ImageBlob

logger = logging.getLogger(__name__)


class ImageServer:
    """HTTP retrieval boundary in front of AccessGate."""

    def __init__(self, gate: AccessGate, host: str = "127.0.0.1", port: int = 8765) -> None:
        self.gate = gate
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/memo-image/{image_id}", self._handle_image)
        app.router.add_get("/resolve", self._handle_resolve)
        app.router.add_get("/health", self._handle_health)
        return app

    # ── Handlers ─────────────────────────────────────────────

    async def _handle_image(self, request: web.Request) -> web.Response:
        image_id = request.match_info["image_id"]
        return await self._respond(self.gate.fetch_id(image_id))

    async def _handle_resolve(self, request: web.Request) -> web.Response:
        locator = request.query.get("src", "")
        return await self._respond(self.gate.fetch(locator))

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def _respond(self, pending) -> web.Response:
        try:
            blob: ImageBlob = await pending
        except InvalidIdentifier as e:
            logger.warning("Rejected image request: %s", e)
            return web.Response(status=400, text="Bad request")
        except ImageNotFound:
            return web.Response(status=404, text="Not found")
        return web.Response(body=blob.data, content_type=blob.content_type)

    # ── Lifecycle ────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        """Start listening (non-blocking)."""
        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("Image server listening on http://%s:%d", self.host, self.port)

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Image server stopped")

    async def run_until(self, shutdown_event: asyncio.Event) -> None:
        """Serve until *shutdown_event* is set."""
        await self.start()
        try:
            await shutdown_event.wait()
        finally:
            await self.stop()
