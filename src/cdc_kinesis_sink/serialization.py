from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from cdc_kinesis_sink.errors import SerializationError

_BYTES_LIKE = (bytes, bytearray, memoryview)


def render_text(value: Any) -> str:
    if isinstance(value, str):
        return value

    if isinstance(value, _BYTES_LIKE):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SerializationError("Key/value bytes are not valid UTF-8") from exc

    if isinstance(value, BaseModel):
        return value.model_dump_json()

    # bool is an int subclass; both render through str().
    if isinstance(value, (int, float)):
        return str(value)

    if isinstance(value, (Mapping, Sequence)):
        try:
            return json.dumps(value, separators=(",", ":"), default=str)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Unable to render {type(value).__name__} as JSON") from exc

    raise SerializationError(f"Unexpected data type from upstream engine: {type(value).__name__}")


def render_bytes(value: Any) -> bytes:
    if isinstance(value, _BYTES_LIKE):
        return bytes(value)
    return render_text(value).encode("utf-8")
