"""Persistence port for guessed-word lists.

A store maps a storage key (see ``storage_key``) to the ordered list of
words accepted for that puzzle. Reads of an absent key return ``[]``.
No Flask or database imports here; the SQL implementation lives in
``store.py``.
"""

from typing import Dict, List, Protocol


STORAGE_KEY_PREFIX = 'guessed_'


def storage_key(letters: str) -> str:
    return STORAGE_KEY_PREFIX + letters


class GuessStore(Protocol):
    def read(self, key: str) -> List[str]: ...

    def write(self, key: str, words: List[str]) -> None: ...


class InMemoryGuessStore:
    """Dict-backed store; used by tests and by callers without a database."""

    def __init__(self, initial: Dict[str, List[str]] = None):
        self._data: Dict[str, List[str]] = {k: list(v) for k, v in (initial or {}).items()}

    def read(self, key: str) -> List[str]:
        return list(self._data.get(key, []))

    def write(self, key: str, words: List[str]) -> None:
        self._data[key] = list(words)

    def keys(self) -> List[str]:
        return list(self._data)
