"""Generic key-value storage interfaces and a thread-safe in-memory store."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator
from typing import Generic, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ReadStorage(ABC, Generic[K, V]):
    """Read-only access to a key-value store."""

    @abstractmethod
    def list(self) -> list[K]:
        """Return all keys currently stored."""

    @abstractmethod
    def get(self, key: K) -> Optional[V]:
        """Return the value for ``key``, or ``None`` when it is absent."""

    @abstractmethod
    def is_empty(self) -> bool:
        """Report whether the store holds no entries."""

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        """Report whether ``key`` is stored."""


class Storage(ReadStorage[K, V]):
    """A key-value store that can also be modified."""

    @abstractmethod
    def store(self, key: K, value: V) -> None:
        """Insert or overwrite the value for ``key``."""

    @abstractmethod
    def remove(self, key: K) -> bool:
        """Delete ``key``; return whether it was present."""

    @abstractmethod
    def clean(self) -> bool:
        """Delete every entry; return whether any were present."""


class _ReadOnlyView(ReadStorage[K, V]):
    """A live, read-only view of another store."""

    def __init__(self, source: ReadStorage[K, V]) -> None:
        self._source = source

    def list(self) -> list[K]:
        return self._source.list()

    def get(self, key: K) -> Optional[V]:
        return self._source.get(key)

    def is_empty(self) -> bool:
        return self._source.is_empty()

    def __contains__(self, key: object) -> bool:
        return key in self._source


class MemoryStorage(Storage[K, V]):
    """A dictionary-backed store, safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[K, V] = {}

    def as_read_storage(self) -> ReadStorage[K, V]:
        """Return a read-only view that reflects later changes."""
        return _ReadOnlyView(self)

    def store(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value

    def clean(self) -> bool:
        with self._lock:
            existed = bool(self._data)
            self._data.clear()
            return existed

    def is_empty(self) -> bool:
        with self._lock:
            return not self._data

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            return self._data.get(key)

    def list(self) -> list[K]:
        with self._lock:
            return list(self._data)

    def remove(self, key: K) -> bool:
        with self._lock:
            return self._data.pop(key, _MISSING) is not _MISSING

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __iter__(self) -> Iterator[K]:
        return iter(self.list())


_MISSING = object()

StringToBytesStorage = Storage[str, bytes]
ReadOnlyStringToBytesStorage = ReadStorage[str, bytes]