# contextualizer/infrastructure/history_store.py

import json
import os
import threading
from pathlib import Path
from typing import List

from contextualizer.domain.interfaces import SearchHistoryPort


DEFAULT_HISTORY_LIMIT = 10


class JsonSearchHistoryStore(SearchHistoryPort):
    """
    Recent search terms persisted as a JSON array, most recent first.
    Terms differing only in case count as the same search.

    record() and clear() are serialised; the API calls them from worker threads.
    """

    def __init__(self, path: str, limit: int = DEFAULT_HISTORY_LIMIT):
        self._path = Path(path)
        self._limit = limit
        self._lock = threading.Lock()

    def list_terms(self) -> List[str]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as error:
            print(f"[HistoryStore] Failed to parse search history: {error}")
            return []
        if not isinstance(data, list):
            print("[HistoryStore] Search history is not a list — ignoring it.")
            return []
        return [term for term in data if isinstance(term, str)]

    def record(self, term: str) -> List[str]:
        with self._lock:
            lowered = term.lower()
            remaining = [item for item in self.list_terms() if item.lower() != lowered]
            history = [term, *remaining][: self._limit]
            self._save(history)
            return history

    def clear(self) -> None:
        with self._lock:
            self._path.unlink(missing_ok=True)

    def _save(self, history: List[str]) -> None:
        # Readers never see a half-written file
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(history, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self._path)
