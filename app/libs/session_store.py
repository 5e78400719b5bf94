"""Key/value session storage."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# Last hero fetched by id
HERO_KEY = "hero"
# Generic value cache
RAW_KEY = "key"


@runtime_checkable
class SessionStore(Protocol):
    """Minimal text key/value store, last write wins."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemorySessionStore:
    """Dict-backed SessionStore living as long as the process."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
