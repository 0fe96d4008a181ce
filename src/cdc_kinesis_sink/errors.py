from __future__ import annotations


class SinkError(Exception):
    """Base class for errors raised by the Kinesis change sink."""


class SerializationError(SinkError):
    pass


class PublishTransportError(SinkError):
    """A PutRecords call failed as a whole; no per-record outcome is available."""

    def __init__(self, message: str, *, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class DeliveryError(SinkError):
    """Retry budget exhausted for a window. Not retried; the batch must be redelivered."""

    def __init__(
        self,
        *,
        stream_name: str,
        attempts: int,
        failed_positions: tuple[int, ...],
    ) -> None:
        super().__init__(
            f"Exceeded maximum number of attempts ({attempts}) to publish "
            f"{len(failed_positions)} record(s) to {stream_name}"
        )
        self.stream_name = stream_name
        self.attempts = attempts
        self.failed_positions = failed_positions
