"""The single versioned memo record: load with quarantine, save atomically.

The record file is always replaced wholesale. ``save`` stages the new record
in ``memo.json.tmp`` and renames it over ``memo.json``, so a reader sees
either the previous complete record or the new one. ``load`` never fails on
bad content: an unreadable record is renamed aside as
``memo.json.corrupt-<ms>`` and a fresh default record is returned.

Saves issued through one ``MemoStore`` share the staging file, so they are
queued on a single-writer lock and land in call order. Separate processes
writing the same root are not coordinated; there the last rename wins.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any

from alwaysmemo.storage.paths import StoragePaths

logger = logging.getLogger(__name__)

RECORD_VERSION = 1


def now_iso() -> str:
    """UTC timestamp with millisecond precision, e.g. 2026-10-19T08:30:00.125Z."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def default_doc() -> dict[str, Any]:
    return {"type": "doc", "content": [{"type": "paragraph"}]}


def fallback_record() -> dict[str, Any]:
    return {"version": RECORD_VERSION, "updatedAt": now_iso(), "doc": default_doc()}


def is_memo_record(value: Any) -> bool:
    """Envelope check only; ``doc`` itself is never inspected."""
    if not isinstance(value, dict):
        return False
    version = value.get("version")
    # bool is an int subclass; JSON ``true`` must not pass as version 1
    if isinstance(version, bool) or version != RECORD_VERSION:
        return False
    if not isinstance(value.get("updatedAt"), str):
        return False
    # any JSON value, null included, is a valid doc; only a missing key is not
    return "doc" in value


class MemoStore:
    """Load/save access to ``memo.json`` under one storage root."""

    def __init__(self, paths: StoragePaths) -> None:
        self.paths = paths
        self._write_lock = asyncio.Lock()

    # ── Load ─────────────────────────────────────────────────

    async def load(self) -> dict[str, Any]:
        """Return the stored record, or a default one if absent or invalid."""
        return await asyncio.to_thread(self._load_sync)

    def _load_sync(self) -> dict[str, Any]:
        self.paths.ensure_dirs()

        try:
            raw = self.paths.memo_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return fallback_record()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Memo file unreadable: %s", e)
            self._quarantine()
            return fallback_record()

        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None

        if not is_memo_record(parsed):
            self._quarantine()
            return fallback_record()

        return parsed

    def _quarantine(self) -> None:
        """Rename the bad record aside. Best-effort.

        A failed rename is ignored: the caller still gets the default record,
        and the original file stays where it was. An existing quarantine file
        is never overwritten; the stamp is bumped until the name is free.
        """
        stamp = int(time.time() * 1000)
        target = self.paths.quarantine_file(stamp)
        while target.exists():
            stamp += 1
            target = self.paths.quarantine_file(stamp)
        try:
            os.replace(self.paths.memo_file, target)
        except OSError as e:
            logger.warning("Could not quarantine %s: %s", self.paths.memo_file, e)
            return
        logger.warning("Invalid memo file moved to %s", target.name)

    # ── Save ─────────────────────────────────────────────────

    async def save(self, doc: Any) -> str:
        """Persist *doc* in a fresh record and return its ``updatedAt``.

        OSError from directory creation, the staging write or the rename
        propagates unchanged. Concurrent calls wait their turn.
        """
        async with self._write_lock:
            return await asyncio.to_thread(self._save_sync, doc)

    def _save_sync(self, doc: Any) -> str:
        self.paths.ensure_dirs()

        record = {"version": RECORD_VERSION, "updatedAt": now_iso(), "doc": doc}
        payload = json.dumps(record, ensure_ascii=False, indent=2)

        tmp = self.paths.temp_file
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.paths.memo_file)

        logger.debug("Memo saved (%d bytes)", len(payload))
        return record["updatedAt"]
