from __future__ import annotations

from typing import Literal
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False)

    aws_region: str = Field(alias="AWS_REGION")
    kinesis_endpoint: str | None = Field(default=None, alias="KINESIS_ENDPOINT")
    kinesis_credentials_profile: str | None = Field(
        default=None,
        alias="KINESIS_CREDENTIALS_PROFILE",
    )
    kinesis_null_key: str = Field(default="default", alias="KINESIS_NULL_KEY")
    kinesis_stream_name_mode: Literal["identity", "sanitized"] = Field(
        default="identity",
        alias="KINESIS_STREAM_NAME_MODE",
    )

    cli_batch_size: int = Field(default=2048, alias="CLI_BATCH_SIZE")

    @field_validator("aws_region")
    @classmethod
    def _validate_region(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("AWS_REGION must not be empty")
        return value

    @field_validator("kinesis_credentials_profile")
    @classmethod
    def _blank_profile_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("kinesis_endpoint")
    @classmethod
    def _validate_endpoint(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError("KINESIS_ENDPOINT must be an http(s) URL")
        return value

    @field_validator("kinesis_null_key")
    @classmethod
    def _validate_null_key(cls, value: str) -> str:
        if not value:
            raise ValueError("KINESIS_NULL_KEY must not be empty")
        if len(value) > 256:
            raise ValueError("KINESIS_NULL_KEY must be at most 256 characters")
        return value

    @field_validator("cli_batch_size")
    @classmethod
    def _validate_cli_batch_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("CLI_BATCH_SIZE must be >= 1")
        return value
