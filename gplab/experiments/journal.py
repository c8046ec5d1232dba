"""Bounded in-memory journal of perceptron training runs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from gplab.utils.observability import write_history_csv

MAX_ENTRIES = 12


@dataclass(frozen=True)
class JournalEntry:
    timestamp: str
    dataset_size: int
    classes: int
    epochs: int
    mse: float
    accuracy: float  # percent


class ExperimentJournal:
    """Newest-first list of training summaries, capped at ``max_entries``."""

    def __init__(self, max_entries: int = MAX_ENTRIES) -> None:
        self.max_entries = max(1, int(max_entries))
        self._entries: list[JournalEntry] = []

    def record(self, result: Any, dataset_size: int, timestamp: datetime | None = None) -> JournalEntry:
        """Add a summary of a ``TrainingResult`` and drop the oldest overflow."""
        ts = (timestamp or datetime.now()).isoformat(timespec='seconds')
        entry = JournalEntry(
            timestamp=ts,
            dataset_size=int(dataset_size),
            classes=len(result.perceptron.neurons),
            epochs=int(result.epochs),
            mse=round(float(result.mse), 5),
            accuracy=round(float(result.accuracy) * 100, 1),
        )
        self._entries.insert(0, entry)
        del self._entries[self.max_entries:]
        return entry

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def export_csv(self, path: str | Path) -> Path:
        return write_history_csv(path, self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ['ExperimentJournal', 'JournalEntry', 'MAX_ENTRIES']
