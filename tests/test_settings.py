"""Tests for CommitLogSettings."""

import json

import pytest
from pydantic import ValidationError

from commit_log.exceptions import InvalidArgumentError
from commit_log.models import DEFAULT_TIMESTAMP_FORMAT
from commit_log.settings import DEFAULT_SETTINGS, CommitLogSettings


def test_defaults():
    assert DEFAULT_SETTINGS.timestamp_format == DEFAULT_TIMESTAMP_FORMAT
    assert DEFAULT_SETTINGS.timezone is None
    assert DEFAULT_SETTINGS.tzinfo is None
    assert DEFAULT_SETTINGS.log_level == "WARNING"


def test_timezone_resolves():
    settings = CommitLogSettings(timezone="UTC")
    assert settings.tzinfo is not None
    assert settings.tzinfo.key == "UTC"


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError):
        CommitLogSettings(timezone="Mars/Olympus_Mons")


def test_log_level_normalized():
    assert CommitLogSettings(log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        CommitLogSettings(log_level="chatty")


def test_from_file(tmp_path):
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"timezone": "UTC", "timestamp_format": "%H:%M"}))

    settings = CommitLogSettings.from_file(config)

    assert settings.timezone == "UTC"
    assert settings.timestamp_format == "%H:%M"
    assert settings.log_level == "WARNING"


def test_from_file_missing(tmp_path):
    with pytest.raises(InvalidArgumentError):
        CommitLogSettings.from_file(tmp_path / "missing.json")


def test_from_file_bad_json(tmp_path):
    config = tmp_path / "settings.json"
    config.write_text("{not json")

    with pytest.raises(InvalidArgumentError):
        CommitLogSettings.from_file(config)


def test_from_file_not_an_object(tmp_path):
    config = tmp_path / "settings.json"
    config.write_text("[]")

    with pytest.raises(InvalidArgumentError):
        CommitLogSettings.from_file(config)


def test_from_file_invalid_values(tmp_path):
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"timezone": "Nowhere/Special"}))

    with pytest.raises(InvalidArgumentError):
        CommitLogSettings.from_file(config)
