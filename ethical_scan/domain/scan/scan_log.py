"""
Scan progress log.

Ordered, append-only stream of timestamped messages for one
orchestration run. Presentation layers either read the entries at the
end of the run or subscribe to receive each entry as it is appended.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

ScanLogListener = Callable[["ScanLogEntry"], None]


class ScanLogEntry(BaseModel):
    """One progress message."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="When the entry was appended (UTC)")
    message: str = Field(..., description="Human-readable progress message")

    def format(self) -> str:
        """``HH:MM:SS: message`` line for plain-text display."""
        return f"{self.timestamp.strftime('%H:%M:%S')}: {self.message}"


class ScanLog:
    """Append-only progress log.

    Example:
        >>> log = ScanLog()
        >>> log.append("Starting barcode scan...")
        >>> log.messages()
        ['Starting barcode scan...']
    """

    def __init__(self, listeners: Optional[list[ScanLogListener]] = None) -> None:
        self._entries: list[ScanLogEntry] = []
        self._listeners: list[ScanLogListener] = list(listeners or [])

    def subscribe(self, listener: ScanLogListener) -> None:
        """Receive every entry appended from now on."""
        self._listeners.append(listener)

    def append(self, message: str) -> ScanLogEntry:
        """Append a message and notify listeners in subscription order."""
        entry = ScanLogEntry(timestamp=datetime.now(timezone.utc), message=message)
        self._entries.append(entry)
        for listener in self._listeners:
            listener(entry)
        return entry

    @property
    def entries(self) -> tuple[ScanLogEntry, ...]:
        """Snapshot of all entries, oldest first."""
        return tuple(self._entries)

    def messages(self) -> list[str]:
        """Messages without timestamps, oldest first."""
        return [entry.message for entry in self._entries]

    def __iter__(self) -> Iterator[ScanLogEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
