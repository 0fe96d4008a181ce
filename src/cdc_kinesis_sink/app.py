from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from pydantic import ValidationError

from cdc_kinesis_sink.models import ChangeEvent
from cdc_kinesis_sink.settings import Settings
from cdc_kinesis_sink.sink import ClientFactory, KinesisChangeSink

LOGGER = logging.getLogger(__name__)


def configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def read_events(lines: Iterable[str]) -> Iterator[ChangeEvent]:
    """Parse newline-delimited JSON change events, skipping blank lines."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield ChangeEvent.model_validate_json(line)
        except ValidationError as exc:
            raise ValueError(f"Invalid change event on line {line_number}: {exc}") from exc


def chunked(events: Iterable[ChangeEvent], size: int) -> Iterator[list[ChangeEvent]]:
    chunk: list[ChangeEvent] = []
    for event in events:
        chunk.append(event)
        if len(chunk) >= size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


async def run(
    stream: TextIO | None = None,
    *,
    settings: Settings | None = None,
    client_factory: ClientFactory | None = None,
) -> int:
    configure_logging()
    if settings is None:
        settings = Settings()
    if stream is None:
        stream = sys.stdin

    LOGGER.info(
        "service_start",
        extra={
            "aws_region": settings.aws_region,
            "kinesis_endpoint": settings.kinesis_endpoint,
            "batch_size": settings.cli_batch_size,
        },
    )

    published = 0
    with KinesisChangeSink.from_settings(settings, client_factory=client_factory) as sink:
        for batch in chunked(read_events(stream), settings.cli_batch_size):
            result = await sink.publish_batch(batch)
            published += len(result.processed)
            if result.error is not None:
                LOGGER.error(
                    "batch_delivery_failed",
                    extra={
                        "published": published,
                        "batch_size": len(batch),
                        "error": str(result.error),
                    },
                )
                return 1

    LOGGER.info("service_stop", extra={"published": published})
    return 0
