from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cdc_kinesis_sink.errors import PublishTransportError
from cdc_kinesis_sink.models import RecordOutcome, RecordResult, WireRecord
from cdc_kinesis_sink.naming import StreamNameMapper, identity_stream_name

LOGGER = logging.getLogger(__name__)


class KinesisClient(Protocol):
    def put_records(self, *, StreamName: str, Records: list[dict[str, Any]]) -> dict[str, Any]:
        ...


def create_kinesis_client(
    *,
    region_name: str,
    endpoint_url: str | None = None,
    profile_name: str | None = None,
) -> KinesisClient:
    session = boto3.Session(profile_name=profile_name, region_name=region_name)
    return session.client("kinesis", region_name=region_name, endpoint_url=endpoint_url)


def close_kinesis_client(client: KinesisClient) -> None:
    close = getattr(client, "close", None)
    if close is None:
        return

    try:
        close()
    except Exception:
        LOGGER.warning("kinesis_client_close_failed", exc_info=True)


class KinesisBatchWriter:
    """Issues exactly one PutRecords request per call and pairs each record with its result."""

    def __init__(
        self,
        *,
        client: KinesisClient,
        stream_name_mapper: StreamNameMapper = identity_stream_name,
    ) -> None:
        self._client = client
        self._stream_name_mapper = stream_name_mapper

    async def put_records(self, destination: str, records: Sequence[WireRecord]) -> list[RecordResult]:
        if not records:
            raise ValueError("records must not be empty")

        stream_name = self._stream_name_mapper(destination)
        try:
            response = await asyncio.to_thread(
                self._client.put_records,
                StreamName=stream_name,
                Records=[record.to_request_entry() for record in records],
            )
        except (BotoCoreError, ClientError) as exc:
            error_code, error_message = _extract_exception_error(exc)
            raise PublishTransportError(
                f"PutRecords to {stream_name} failed: {error_message}",
                error_code=error_code,
            ) from exc

        LOGGER.debug(
            "kinesis_put_records_response",
            extra={
                "stream_name": stream_name,
                "failed_record_count": response.get("FailedRecordCount", 0),
            },
        )

        returned = response.get("Records", [])
        if len(returned) != len(records):
            raise PublishTransportError(
                "PutRecords returned mismatched result count "
                f"({len(returned)} != {len(records)})"
            )

        return [
            RecordResult(record=record, outcome=RecordOutcome.from_response_entry(entry))
            for record, entry in zip(records, returned, strict=True)
        ]


def _extract_exception_error(exc: Exception) -> tuple[str | None, str | None]:
    response = getattr(exc, "response", None)
    if isinstance(response, dict):
        error = response.get("Error")
        if isinstance(error, dict):
            code = error.get("Code")
            message = error.get("Message")
            return (
                str(code) if code is not None else None,
                str(message) if message is not None else None,
            )

    return None, str(exc)
