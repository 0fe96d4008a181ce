from __future__ import annotations

from collections.abc import Sequence

from cdc_kinesis_sink.models import ChangeEvent, WireRecord
from cdc_kinesis_sink.serialization import render_bytes, render_text

DEFAULT_NULL_KEY = "default"


def to_wire_record(event: ChangeEvent, *, position: int, null_key: str = DEFAULT_NULL_KEY) -> WireRecord:
    """Build the PutRecords entry for one event.

    The partition key is the rendered event key, or null_key when the key is
    missing or renders to an empty string. A missing value becomes b"".
    """
    partition_key = render_text(event.key) if event.key is not None else ""
    if not partition_key:
        # Kinesis rejects empty partition keys; an empty key counts as absent.
        partition_key = null_key

    data = render_bytes(event.value) if event.value is not None else b""
    return WireRecord(partition_key=partition_key, data=data, position=position)


def to_wire_records(events: Sequence[ChangeEvent], *, null_key: str = DEFAULT_NULL_KEY) -> list[WireRecord]:
    return [
        to_wire_record(event, position=position, null_key=null_key)
        for position, event in enumerate(events)
    ]
