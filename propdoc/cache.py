import os
import threading
from typing import Dict, List, Optional, Tuple

from propdoc.base.models import ComponentMetadata


class ExtractionCache:
    """In-memory per-file results keyed by path, invalidated by modification time."""

    def __init__(self):
        self._entries: Dict[str, Tuple[int, List[ComponentMetadata]]] = {}
        self._lock = threading.Lock()

    def get(self, file_path: str) -> Optional[List[ComponentMetadata]]:
        with self._lock:
            cached = self._entries.get(file_path)
        if cached is None:
            return None
        try:
            mtime = os.stat(file_path).st_mtime_ns
        except OSError:
            self.delete(file_path)
            return None
        if mtime > cached[0]:
            self.delete(file_path)
            return None
        return list(cached[1])

    def set(self, file_path: str, metadata: List[ComponentMetadata]) -> None:
        try:
            mtime = os.stat(file_path).st_mtime_ns
        except OSError:
            return
        with self._lock:
            self._entries[file_path] = (mtime, list(metadata))

    def delete(self, file_path: str) -> None:
        with self._lock:
            self._entries.pop(file_path, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, file_path) -> bool:
        return file_path in self._entries
