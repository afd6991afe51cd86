import threading
from typing import List, Optional, Tuple

from .analyzer import fingerprint
from .errors import DuplicateError
from .schemas import StringEntry


class EntryStore:
    """Insertion-ordered, in-memory collection of analyzed strings.

    One instance is owned by the application and handed to request
    handlers. Sync endpoints run on a thread pool, so every operation
    holds ``_lock``; reads hand back tuple snapshots.
    """

    def __init__(self) -> None:
        self._entries: List[StringEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def insert(self, entry: StringEntry) -> StringEntry:
        with self._lock:
            if any(e.id == entry.id for e in self._entries):
                raise DuplicateError("String already exists in the system")
            self._entries.append(entry)
        return entry

    def find_by_fingerprint(self, fp: str) -> Optional[StringEntry]:
        with self._lock:
            for entry in self._entries:
                if entry.id == fp:
                    return entry
        return None

    def find_by_value(self, value: str) -> Optional[StringEntry]:
        return self.find_by_fingerprint(fingerprint(value))

    def all(self) -> Tuple[StringEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def delete_by_fingerprint(self, fp: str) -> bool:
        with self._lock:
            for i, entry in enumerate(self._entries):
                if entry.id == fp:
                    del self._entries[i]
                    return True
        return False

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
