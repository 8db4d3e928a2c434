"""Tests for the JSON configuration loader."""

import json
from pathlib import Path

import pytest

from utils.config import AppConfig, ConfigFileError
from utils.constants import DEFAULT_INTERVAL, DEFAULT_MAX_RESULTS, DEFAULT_MAX_WORKERS


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = AppConfig.load()
    assert config == AppConfig(DEFAULT_MAX_RESULTS, DEFAULT_INTERVAL, DEFAULT_MAX_WORKERS, None)


def test_default_file_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / 'vidsearch.json').write_text(json.dumps({"max_results": 20}), encoding='utf-8')
    monkeypatch.chdir(tmp_path)
    assert AppConfig.load().max_results == 20


def test_explicit_file(tmp_path):
    path = tmp_path / 'custom.json'
    path.write_text(json.dumps({
        "max_results": 5,
        "interval": 3,
        "max_workers": 4,
        "log_file": "logs/vidsearch.log",
    }), encoding='utf-8')

    config = AppConfig.load(path)

    assert config.max_results == 5
    assert config.interval == 3
    assert config.max_workers == 4
    assert config.log_file == Path("logs/vidsearch.log")


def test_unknown_keys_are_ignored(caplog):
    config = AppConfig.from_dict({"interval": 2, "theme": "dark"})
    assert config.interval == 2
    assert "theme" in caplog.text


@pytest.mark.parametrize("data", [
    {"max_results": 0},
    {"interval": "2"},
    {"max_workers": True},
    {"log_file": 42},
])
def test_invalid_values(data):
    with pytest.raises(ConfigFileError):
        AppConfig.from_dict(data)


def test_malformed_json(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text("{not json", encoding='utf-8')
    with pytest.raises(ConfigFileError):
        AppConfig.load(path)


def test_non_object_json(tmp_path):
    path = tmp_path / 'list.json'
    path.write_text("[1, 2]", encoding='utf-8')
    with pytest.raises(ConfigFileError):
        AppConfig.load(path)


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigFileError):
        AppConfig.load(tmp_path / 'absent.json')
