from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

from cdc_kinesis_sink.errors import DeliveryError, PublishTransportError
from cdc_kinesis_sink.models import RecordResult, WireRecord

LOGGER = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
RETRY_INTERVAL_S = 1.0


class BatchWriter(Protocol):
    async def put_records(self, destination: str, records: Sequence[WireRecord]) -> list[RecordResult]:
        ...


class WindowRetryCoordinator:
    """Publishes one window until every record succeeded or the attempt budget runs out.

    Partial failures resubmit only the records whose paired outcome failed;
    transport failures resubmit the whole candidate list. Both kinds share one
    attempt counter, and attempts are separated by a fixed sleep.
    """

    def __init__(
        self,
        *,
        writer: BatchWriter,
        max_attempts: int = MAX_ATTEMPTS,
        retry_interval_s: float = RETRY_INTERVAL_S,
    ) -> None:
        if max_attempts <= 0:
            raise ValueError("max_attempts must be > 0")
        if retry_interval_s < 0:
            raise ValueError("retry_interval_s must be >= 0")

        self._writer = writer
        self._max_attempts = max_attempts
        self._retry_interval_s = retry_interval_s

    async def publish(self, destination: str, records: Sequence[WireRecord]) -> int:
        """Returns the number of attempts it took; raises DeliveryError when exhausted."""
        pending: list[WireRecord] = list(records)
        attempts = 0

        while pending:
            if attempts >= self._max_attempts:
                LOGGER.error(
                    "kinesis_retry_exhausted",
                    extra={
                        "destination": destination,
                        "pending_count": len(pending),
                        "attempts": attempts,
                    },
                )
                raise DeliveryError(
                    stream_name=destination,
                    attempts=attempts,
                    failed_positions=tuple(record.position for record in pending),
                )

            try:
                results = await self._writer.put_records(destination, pending)
            except PublishTransportError as exc:
                attempts += 1
                LOGGER.warning(
                    "kinesis_put_records_failed",
                    exc_info=True,
                    extra={
                        "destination": destination,
                        "pending_count": len(pending),
                        "attempt": attempts,
                        "error_code": exc.error_code,
                    },
                )
                await self._backoff(attempts)
                continue

            failed = [result.record for result in results if not result.succeeded]
            if not failed:
                return attempts + 1

            attempts += 1
            LOGGER.warning(
                "kinesis_partial_failure",
                extra={
                    "destination": destination,
                    "failed": len(failed),
                    "succeeded": len(pending) - len(failed),
                    "attempt": attempts,
                    "error_codes": sorted(
                        {result.outcome.error_code for result in results if not result.succeeded}
                    ),
                },
            )
            pending = failed
            await self._backoff(attempts)

        return attempts

    async def _backoff(self, attempts: int) -> None:
        # Budget spent: the next loop iteration raises without sleeping.
        if attempts >= self._max_attempts:
            return
        await asyncio.sleep(self._retry_interval_s)
