"""Per-file memory of the last interactively chosen region.

Stored as one JSON document (``~/.httpyac/recent.json`` by default)::

    {
      "version": 1,
      "selections": {
        "/abs/path/api.http": {"regionName": "getUsers", "timestamp": 1700000000000}
      }
    }

Keys are absolute paths so the same file is recognized from any working
directory. The store is a convenience cache: loading falls back to an empty
document on any problem and saving never raises.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
ALL_REGIONS = "all"


@dataclass
class RecentFileSelection:
    """One remembered choice: ``"all"`` or a region symbol name."""

    region_name: str
    timestamp: int


@dataclass
class RecentSelectionsData:
    """The persisted document."""

    version: int = SCHEMA_VERSION
    selections: dict[str, RecentFileSelection] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "selections": {
                path: {"regionName": entry.region_name, "timestamp": entry.timestamp}
                for path, entry in self.selections.items()
            },
        }

    @classmethod
    def from_dict(cls, raw: object) -> RecentSelectionsData | None:
        """Validate a decoded document. Returns None unless the whole document is well-formed."""
        if not isinstance(raw, dict):
            return None
        version = raw.get("version")
        if type(version) is not int or version != SCHEMA_VERSION:
            return None
        selections = raw.get("selections")
        if not isinstance(selections, dict):
            return None

        data = cls()
        for path, entry in selections.items():
            if not isinstance(entry, dict):
                return None
            region_name = entry.get("regionName")
            timestamp = entry.get("timestamp", 0)
            if not isinstance(region_name, str):
                return None
            if type(timestamp) is not int:
                return None
            data.selections[path] = RecentFileSelection(region_name, timestamp)
        return data


def _now_ms() -> int:
    return int(time.time() * 1000)


class RecencyStore:
    """Load/save the recent selections document at a fixed location."""

    def __init__(self, path: Path) -> None:
        self.path = path

    # ── I/O ──────────────────────────────────────────────────

    async def load(self) -> RecentSelectionsData:
        """Read the document; any failure yields a fresh empty one."""
        return await asyncio.to_thread(self._read)

    async def save(self, data: RecentSelectionsData) -> bool:
        """Overwrite the document. Returns False instead of raising on failure."""
        return await asyncio.to_thread(self._write, data)

    def _read(self) -> RecentSelectionsData:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError, RecursionError) as e:
            logger.debug("No usable recent selections at %s: %s", self.path, e)
            return RecentSelectionsData()

        data = RecentSelectionsData.from_dict(raw)
        if data is None:
            logger.debug("Discarding recent selections at %s: unsupported format", self.path)
            return RecentSelectionsData()
        return data

    def _write(self, data: RecentSelectionsData) -> bool:
        # Failures stay silent.
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data.to_dict(), indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError):
            return False
        return True

    # ── In-memory access ─────────────────────────────────────

    @staticmethod
    def get(data: RecentSelectionsData, file_path: str) -> str | None:
        entry = data.selections.get(file_path)
        return entry.region_name if entry else None

    @staticmethod
    def set(data: RecentSelectionsData, file_path: str, region_name: str) -> None:
        """Upsert the entry for file_path. Does not persist."""
        previous = data.selections.get(file_path)
        timestamp = _now_ms()
        if previous is not None:
            timestamp = max(timestamp, previous.timestamp)
        data.selections[file_path] = RecentFileSelection(region_name, timestamp)
