"""Ordered log of prompt -> config associations, most recent first."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from chartgen.models.chart import ChartConfig
from chartgen.models.history import HistoryEntry

_entries_adapter = TypeAdapter(List[HistoryEntry])


class HistoryStore:
    """In-memory history with optional JSON file persistence.

    Entries are immutable; the store only prepends, deletes and clears.
    Persisted history that cannot be parsed is discarded wholesale.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, entries: Optional[List[HistoryEntry]] = None):
        self.path = Path(path) if path is not None else None
        self._entries: List[HistoryEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def add(self, prompt: str, config: ChartConfig, image: Optional[str] = None) -> HistoryEntry:
        entry = HistoryEntry(prompt=prompt, config=config, image=image)
        self._entries.insert(0, entry)
        return entry

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def delete(self, entry_id: str) -> bool:
        """Remove one entry. Returns False if no entry has that id."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                del self._entries[index]
                return True
        return False

    def clear(self) -> None:
        self._entries = []

    def to_json(self) -> str:
        return _entries_adapter.dump_json(self._entries, by_alias=True, exclude_none=True).decode()

    @classmethod
    def from_json(cls, text: str, path: Optional[Union[str, Path]] = None) -> "HistoryStore":
        """Restore a store from serialized history; corrupt input yields an empty store."""
        try:
            entries = _entries_adapter.validate_json(text)
        except ValidationError as e:
            logging.warning(f"Discarding unreadable history ({e.error_count()} errors)")
            entries = []
        return cls(path=path, entries=entries)

    def load(self) -> None:
        """Replace the in-memory entries with the persisted ones."""
        if self.path is None or not self.path.exists():
            self._entries = []
            return
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logging.warning(f"Discarding unreadable history file {self.path}: {e}")
            self._entries = []
            return
        self._entries = HistoryStore.from_json(text).entries

    def save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.to_json(), encoding="utf-8")
