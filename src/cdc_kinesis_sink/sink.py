from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from types import TracebackType

from cdc_kinesis_sink.ack import AckTracker, CollectingCommitter, RecordCommitter
from cdc_kinesis_sink.batching import MAX_BATCH_RECORDS, split_windows
from cdc_kinesis_sink.errors import SinkError
from cdc_kinesis_sink.kinesis import (
    KinesisBatchWriter,
    KinesisClient,
    close_kinesis_client,
    create_kinesis_client,
)
from cdc_kinesis_sink.models import BatchResult, ChangeEvent
from cdc_kinesis_sink.naming import StreamNameMapper, identity_stream_name, stream_name_mapper_for
from cdc_kinesis_sink.records import DEFAULT_NULL_KEY, to_wire_records
from cdc_kinesis_sink.retry import WindowRetryCoordinator
from cdc_kinesis_sink.settings import Settings

LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[], KinesisClient]


class KinesisChangeSink:
    """Delivers intake batches of change events to Kinesis with at-least-once semantics."""

    def __init__(
        self,
        client: KinesisClient,
        *,
        null_key: str = DEFAULT_NULL_KEY,
        stream_name_mapper: StreamNameMapper = identity_stream_name,
    ) -> None:
        if not null_key:
            raise ValueError("null_key must not be empty")

        self._client = client
        self._null_key = null_key
        self._closed = False
        self._coordinator = WindowRetryCoordinator(
            writer=KinesisBatchWriter(client=client, stream_name_mapper=stream_name_mapper),
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        client_factory: ClientFactory | None = None,
    ) -> KinesisChangeSink:
        if client_factory is not None:
            client = client_factory()
            LOGGER.info("kinesis_client_created", extra={"source": "custom", "client": repr(client)})
        else:
            client = create_kinesis_client(
                region_name=settings.aws_region,
                endpoint_url=settings.kinesis_endpoint,
                profile_name=settings.kinesis_credentials_profile,
            )
            LOGGER.info(
                "kinesis_client_created",
                extra={
                    "source": "default",
                    "region": settings.aws_region,
                    "endpoint": settings.kinesis_endpoint,
                },
            )

        return cls(
            client,
            null_key=settings.kinesis_null_key,
            stream_name_mapper=stream_name_mapper_for(settings.kinesis_stream_name_mode),
        )

    async def handle_batch(self, events: Sequence[ChangeEvent], committer: RecordCommitter) -> None:
        if self._closed:
            raise RuntimeError("KinesisChangeSink is closed")

        tracker = AckTracker(committer)
        if not events:
            tracker.finish_batch()
            return

        destination = events[0].destination
        if any(event.destination != destination for event in events):
            LOGGER.warning(
                "mixed_destinations_in_batch",
                extra={"destination": destination, "event_count": len(events)},
            )

        for window in split_windows(events, max_records=MAX_BATCH_RECORDS):
            records = to_wire_records(window, null_key=self._null_key)
            await self._coordinator.publish(destination, records)
            tracker.acknowledge_window(window)

        tracker.finish_batch()

    async def publish_batch(self, events: Sequence[ChangeEvent]) -> BatchResult:
        committer = CollectingCommitter()
        try:
            await self.handle_batch(events, committer)
        except SinkError as exc:
            return BatchResult(processed=tuple(committer.processed), finished=False, error=exc)

        return BatchResult(processed=tuple(committer.processed), finished=committer.finished)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close_kinesis_client(self._client)

    def __enter__(self) -> KinesisChangeSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
