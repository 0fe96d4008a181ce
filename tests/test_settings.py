from __future__ import annotations

import pytest
from pydantic import ValidationError

from cdc_kinesis_sink.settings import Settings

_OPTIONAL_ENV = (
    "KINESIS_ENDPOINT",
    "KINESIS_CREDENTIALS_PROFILE",
    "KINESIS_NULL_KEY",
    "KINESIS_STREAM_NAME_MODE",
    "CLI_BATCH_SIZE",
)


@pytest.fixture()
def _base_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _OPTIONAL_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_REGION", "us-west-1")


def test_defaults(_base_env: None) -> None:
    settings = Settings()

    assert settings.aws_region == "us-west-1"
    assert settings.kinesis_endpoint is None
    assert settings.kinesis_credentials_profile is None
    assert settings.kinesis_null_key == "default"
    assert settings.kinesis_stream_name_mode == "identity"
    assert settings.cli_batch_size == 2048


def test_region_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AWS_REGION", raising=False)

    with pytest.raises(ValidationError):
        Settings()


def test_optional_client_settings_are_read(
    _base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("KINESIS_ENDPOINT", "http://localhost:4566")
    monkeypatch.setenv("KINESIS_CREDENTIALS_PROFILE", "cdc")
    monkeypatch.setenv("KINESIS_NULL_KEY", "orders")

    settings = Settings()

    assert settings.kinesis_endpoint == "http://localhost:4566"
    assert settings.kinesis_credentials_profile == "cdc"
    assert settings.kinesis_null_key == "orders"


def test_blank_optional_values_are_treated_as_unset(
    _base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("KINESIS_ENDPOINT", " ")
    monkeypatch.setenv("KINESIS_CREDENTIALS_PROFILE", "")

    settings = Settings()

    assert settings.kinesis_endpoint is None
    assert settings.kinesis_credentials_profile is None


def test_endpoint_must_be_http_url(_base_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KINESIS_ENDPOINT", "localhost:4566")

    with pytest.raises(ValidationError):
        Settings()


def test_null_key_must_not_be_empty(_base_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KINESIS_NULL_KEY", "")

    with pytest.raises(ValidationError):
        Settings()


def test_stream_name_mode_rejects_unknown_values(
    _base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("KINESIS_STREAM_NAME_MODE", "upper")

    with pytest.raises(ValidationError):
        Settings()
