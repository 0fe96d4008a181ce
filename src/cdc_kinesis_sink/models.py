from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cdc_kinesis_sink.errors import SinkError


class ChangeEvent(BaseModel):
    """Single captured change handed over by the upstream engine."""

    model_config = ConfigDict(frozen=True)

    key: Any = None
    value: Any = None
    destination: str


class WireRecord(BaseModel):
    """One PutRecords entry; position is the index inside its window."""

    model_config = ConfigDict(frozen=True)

    partition_key: str = Field(min_length=1)
    data: bytes
    position: int = Field(ge=0)

    def to_request_entry(self) -> dict[str, Any]:
        return {"Data": self.data, "PartitionKey": self.partition_key}


class RecordOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    sequence_number: str | None = None
    shard_id: str | None = None
    error_code: str | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return not self.error_code

    @classmethod
    def from_response_entry(cls, entry: dict[str, Any]) -> RecordOutcome:
        error_code = entry.get("ErrorCode")
        error_message = entry.get("ErrorMessage")
        return cls(
            sequence_number=entry.get("SequenceNumber"),
            shard_id=entry.get("ShardId"),
            error_code=str(error_code) if error_code else None,
            error_message=str(error_message) if error_message else None,
        )


class RecordResult(BaseModel):
    """A submitted record paired with the outcome Kinesis reported for it."""

    model_config = ConfigDict(frozen=True)

    record: WireRecord
    outcome: RecordOutcome

    @property
    def succeeded(self) -> bool:
        return self.outcome.succeeded


class BatchResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    processed: tuple[ChangeEvent, ...] = ()
    finished: bool = False
    error: SinkError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.finished
