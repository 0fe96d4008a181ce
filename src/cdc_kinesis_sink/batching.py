from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

# PutRecords accepts at most 500 entries per request.
MAX_BATCH_RECORDS = 500

T = TypeVar("T")


def split_windows(items: Sequence[T], *, max_records: int = MAX_BATCH_RECORDS) -> list[list[T]]:
    """Split items into ordered, contiguous windows of at most max_records each."""
    if max_records <= 0:
        raise ValueError("max_records must be > 0")

    return [list(items[start : start + max_records]) for start in range(0, len(items), max_records)]
