from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from cdc_kinesis_sink.models import ChangeEvent


class RecordCommitter(Protocol):
    def mark_processed(self, event: ChangeEvent) -> None:
        ...

    def mark_batch_finished(self) -> None:
        ...


class CollectingCommitter:
    """In-memory committer; keeps acknowledgements for callers without a host engine."""

    def __init__(self) -> None:
        self.processed: list[ChangeEvent] = []
        self.finished = False

    def mark_processed(self, event: ChangeEvent) -> None:
        self.processed.append(event)

    def mark_batch_finished(self) -> None:
        self.finished = True


class AckTracker:
    """Forwards acknowledgements for one intake batch to the upstream committer."""

    def __init__(self, committer: RecordCommitter) -> None:
        self._committer = committer
        self._processed_count = 0
        self._finished = False

    @property
    def processed_count(self) -> int:
        return self._processed_count

    @property
    def finished(self) -> bool:
        return self._finished

    def acknowledge_window(self, events: Sequence[ChangeEvent]) -> None:
        if self._finished:
            raise RuntimeError("Cannot acknowledge events after the batch was finished")

        for event in events:
            self._committer.mark_processed(event)
            self._processed_count += 1

    def finish_batch(self) -> None:
        if self._finished:
            raise RuntimeError("Batch was already marked finished")

        self._committer.mark_batch_finished()
        self._finished = True
