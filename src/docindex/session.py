"""
Session cache of loaded documents.

Remembers which document paths were already loaded during one agent
session so references are not read into context twice. Entries live until
``reset()``; nothing is persisted.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Dict, Optional


class SessionCache:
    """
    Document path -> first load timestamp (UTC).

    A single lock guards every operation, so one cache may be shared across
    threads.

    Example:
        cache = SessionCache()
        cache.was_loaded("turbo-streams/references/broadcasting.md")  # False
        cache.record_load("turbo-streams/references/broadcasting.md")
        cache.was_loaded("turbo-streams/references/broadcasting.md")  # True
        cache.reset()
    """

    def __init__(self) -> None:
        self._entries: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    def record_load(self, path: str) -> datetime:
        """
        Record that ``path`` was loaded.

        Idempotent by key: a repeat call keeps the first timestamp.

        Returns:
            Timestamp of the first load
        """
        with self._lock:
            if path not in self._entries:
                self._entries[path] = datetime.now(timezone.utc)
            return self._entries[path]

    def claim(self, path: str) -> bool:
        """
        Record ``path`` unless it is already present, in one locked step.

        Returns:
            True if this call recorded it, False if it was already loaded
        """
        with self._lock:
            if path in self._entries:
                return False
            self._entries[path] = datetime.now(timezone.utc)
            return True

    def release(self, path: str) -> None:
        """Drop ``path`` so it can be loaded again (a failed read)."""
        with self._lock:
            self._entries.pop(path, None)

    def was_loaded(self, path: str) -> bool:
        with self._lock:
            return path in self._entries

    def loaded_at(self, path: str) -> Optional[datetime]:
        with self._lock:
            return self._entries.get(path)

    def entries(self) -> Dict[str, datetime]:
        """Snapshot of all entries."""
        with self._lock:
            return dict(self._entries)

    def reset(self) -> None:
        """Forget every entry (end of session)."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries
