"""Entry point: python -m alwaysmemo [show|serve]

- No args / "show": Print the stored memo record as JSON
- "serve":          Run the image retrieval HTTP surface until interrupted
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
import sys

from alwaysmemo.config import load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _run_show() -> None:
    """Load the memo (creating storage if needed) and print it."""
    config = load_config()
    _setup_logging(config.log_level)

    from alwaysmemo.core import MemoApp

    app = MemoApp(config)
    record = asyncio.run(app.load_memo())
    print(json.dumps(record, ensure_ascii=False, indent=2))


async def _serve(app) -> None:
    from alwaysmemo.server import ImageServer

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown_event.set)

    server = ImageServer(app.gate, app.config.server.host, app.config.server.port)
    await server.run_until(shutdown_event)


def _run_serve() -> None:
    config = load_config()
    _setup_logging(config.log_level)

    from alwaysmemo.core import MemoApp

    app = MemoApp(config)
    logging.getLogger(__name__).info("Data directory: %s", app.paths.root)
    asyncio.run(_serve(app))


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "show"

    if cmd == "show":
        _run_show()
    elif cmd == "serve":
        _run_serve()
    else:
        print("Usage: python -m alwaysmemo [show|serve]")
        print("  show   — Print the stored memo record (default)")
        print("  serve  — Serve stored images over HTTP")
        sys.exit(1)


if __name__ == "__main__":
    main()
