"""In-memory message list shown to the user."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MessageSink(Protocol):
    """Append-only sink for user-facing log lines."""

    def add(self, message: str) -> None: ...


class MessageService:
    """Default MessageSink keeping messages in arrival order."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def add(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages = []
