"""
Process-lifetime key/value store.

No eviction. The API creates one instance at startup and drops it at shutdown;
tests build a fresh one each time.
"""
from typing import Dict, Optional


class ResultCache:
    def __init__(self):
        self._items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str):
        self._items[key] = value

    def clear(self):
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items
