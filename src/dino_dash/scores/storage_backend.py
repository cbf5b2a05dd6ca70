"""
storage_backend.py
------------------
Durable string key/value backends used by the ScoreStore.

Backends only move raw strings; JSON encoding and caching live in the store.
All methods are coroutines so the frame loop never blocks on disk.

Backends
--------
JsonFileBackend  - every key in one JSON object on disk
MemoryBackend    - process-local dict, for tests and storage-less runs
"""

import asyncio
import json
import os
from typing import Dict, List, Optional

from dino_dash.core.debug.debug_logger import DebugLogger


# ===========================================================
# JSON File Backend
# ===========================================================

class JsonFileBackend:
    """
    Stores all keys as one JSON object in a single file.

    Blocking file I/O runs in a worker thread. Writes are serialized with a
    lock and replace the file atomically, so a crash mid-write leaves the
    previous contents intact.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = asyncio.Lock()

    # ===========================================================
    # Public API
    # ===========================================================

    async def get_item(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            await asyncio.to_thread(self._write_all, data)

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            if key not in data:
                return
            del data[key]
            await asyncio.to_thread(self._write_all, data)

    async def get_all_keys(self) -> List[str]:
        data = await asyncio.to_thread(self._read_all)
        return list(data.keys())

    # ===========================================================
    # File Access
    # ===========================================================

    def _read_all(self) -> Dict[str, str]:
        """
        Read the whole file. A missing, undecodable or non-UTF-8 file is an empty store.

        Raises:
            OSError: if the file exists but cannot be read
        """
        if not os.path.exists(self.path):
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except ValueError as e:
                DebugLogger.warn(f"Data file {self.path} is corrupt ({e}), treating as empty",
                                 category="storage")
                return {}

        if not isinstance(data, dict):
            DebugLogger.warn(f"Data file {self.path} has unexpected layout, treating as empty",
                             category="storage")
            return {}
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)


# ===========================================================
# Memory Backend
# ===========================================================

class MemoryBackend:
    """Dict-backed store. Counts reads so cache behavior can be observed."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self.read_count = 0
        self.write_count = 0

    async def get_item(self, key: str) -> Optional[str]:
        self.read_count += 1
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.write_count += 1
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def get_all_keys(self) -> List[str]:
        return list(self._data.keys())
