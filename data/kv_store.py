"""
Key-Value Storage Module

This module provides the in-memory key-value store that stands in for the
device's preferences storage, and FlagStore, which keeps the boolean
"liked" and "answered" flags on top of any KeyValueStore.
"""

from typing import Any, Dict, Hashable, Iterable, List, Optional

from data.protocols import KeyValueStore
from utils.logger import get_logger

logger = get_logger(__name__)

COMMENT_LIKE = "comment_like"
PROMPT_COMPLETED = "prompt_completed"


class InMemoryKeyValueStore:
    """Dictionary-backed KeyValueStore. Contents live for the process lifetime."""

    def __init__(self, initial: Optional[Dict[Hashable, Any]] = None):
        self._data: Dict[Hashable, Any] = dict(initial or {})

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: Hashable) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterable[Hashable]:
        # Snapshot so callers can delete while iterating
        return list(self._data.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._data


class FlagStore:
    """
    Namespaced boolean flags over a KeyValueStore.

    Keys take the form (namespace, entity_id, viewer_id). Two namespaces
    are used by the application:
    - COMMENT_LIKE: (COMMENT_LIKE, comment_id, viewer_id)
    - PROMPT_COMPLETED: (PROMPT_COMPLETED, viewer_id, prompt_id)
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store if store is not None else InMemoryKeyValueStore()

    def is_set(self, namespace: str, first: str, second: str) -> bool:
        return bool(self.store.get((namespace, first, second), False))

    def set_flag(self, namespace: str, first: str, second: str, value: bool = True) -> None:
        self.store.set((namespace, first, second), bool(value))

    def toggle(self, namespace: str, first: str, second: str) -> bool:
        """
        Flip a flag.

        Returns:
            bool: The new value of the flag.
        """
        new_value = not self.is_set(namespace, first, second)
        self.set_flag(namespace, first, second, new_value)
        return new_value

    def _matching(self, namespace: str, first: Optional[str] = None) -> List[tuple]:
        matches = []
        for key in self.store.keys():
            if not isinstance(key, tuple) or len(key) != 3 or key[0] != namespace:
                continue
            if first is not None and key[1] != first:
                continue
            matches.append(key)
        return matches

    def purge(self, namespace: str, first: str) -> int:
        """
        Delete every flag in namespace whose first component is first.

        Returns:
            int: Number of flags removed.
        """
        keys = self._matching(namespace, first)
        for key in keys:
            self.store.delete(key)
        if keys:
            logger.debug(f"Purged {len(keys)} {namespace} flag(s) for {first}")
        return len(keys)

    def clear(self, namespace: str) -> int:
        """
        Delete every flag in namespace.

        Returns:
            int: Number of flags removed.
        """
        keys = self._matching(namespace)
        for key in keys:
            self.store.delete(key)
        logger.debug(f"Cleared {len(keys)} {namespace} flag(s)")
        return len(keys)
