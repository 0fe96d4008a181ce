from __future__ import annotations

import re
from collections.abc import Callable
from typing import Literal

StreamNameMapper = Callable[[str], str]

_INVALID_STREAM_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def identity_stream_name(destination: str) -> str:
    return destination


def kinesis_stream_name(destination: str) -> str:
    """Replace characters Kinesis does not allow in stream names with hyphens."""
    return _INVALID_STREAM_CHARS.sub("-", destination)


def stream_name_mapper_for(mode: Literal["identity", "sanitized"]) -> StreamNameMapper:
    if mode == "identity":
        return identity_stream_name
    if mode == "sanitized":
        return kinesis_stream_name
    raise ValueError(f"Unsupported stream name mode: {mode}")
