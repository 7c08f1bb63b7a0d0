from __future__ import annotations

import json

import pytest
from result import Err, Ok

from appsweep.config.defaults import COMMUNITY_MAPPINGS_URL, default_config
from appsweep.config.loader import CONFIG_ENV, config_path, load_config, sample_config_json
from tests.fs_mock import MemoryFileSystem


def test_load_config_missing_uses_defaults() -> None:
    fs = MemoryFileSystem()
    result = load_config(path="/missing.json", fs=fs)
    assert isinstance(result, Ok)
    cfg = result.unwrap()
    assert cfg.exact_rules
    assert cfg.fuzzy_rules
    assert cfg.mappings_url == COMMUNITY_MAPPINGS_URL


def test_load_config_invalid_returns_warning() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content="not-json")
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    warning = result.unwrap_err()
    assert "failed reading config" in warning.lower()


def test_load_config_requires_object() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content="[1, 2]")
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    assert "json object" in result.unwrap_err().lower()


def test_load_config_bad_value() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content=json.dumps({"scanWorkers": "many"}))
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    assert "invalid value" in result.unwrap_err().lower()


def test_load_config_overrides_and_clamps() -> None:
    payload = {
        "scanWorkers": 0,
        "includeSystemLocations": False,
        "mappingsUrl": "",
        "minStringLength": 1,
        "extraGenericExecutables": ["Launcher"],
        "extraExcludedDotFolders": [".Work"],
    }
    fs = MemoryFileSystem().add_file("/config.json", content=json.dumps(payload))

    cfg = load_config(path="/config.json", fs=fs).unwrap()

    assert cfg.scan_workers == 1
    assert cfg.include_system_locations is False
    assert cfg.mappings_url is None
    assert cfg.min_string_length == 3
    assert "launcher" in cfg.generic_names
    assert "electron" in cfg.generic_names
    assert ".work" in cfg.excluded_dot_names
    assert ".cache" in cfg.excluded_dot_names
    assert cfg.exact_rules == default_config().exact_rules


def test_config_path_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV, "/etc/appsweep.json")
    assert config_path(MemoryFileSystem()) == "/etc/appsweep.json"
    monkeypatch.delenv(CONFIG_ENV)
    assert config_path(MemoryFileSystem()) == "/mock/home/.config/appsweep/config.json"


def test_sample_config_round_trips() -> None:
    data = json.loads(sample_config_json())
    assert data["scanWorkers"] == 4
    assert data["mappingsUrl"] == COMMUNITY_MAPPINGS_URL

    fs = MemoryFileSystem().add_file("/config.json", content=sample_config_json())
    cfg = load_config(path="/config.json", fs=fs).unwrap()
    assert cfg.to_dict() == default_config().to_dict()
