"""Tests for runtime configuration loading."""

import json

import pytest

from matchaudit.config_runtime import DEFAULTS, load_runtime_config
from matchaudit.exceptions import ConfigError


def _write_config(root, data):
    pf = root / ".pf"
    pf.mkdir(exist_ok=True)
    (pf / "config.json").write_text(json.dumps(data))


class TestLoadRuntimeConfig:
    def test_defaults(self, tmp_path):
        cfg = load_runtime_config(str(tmp_path))

        assert cfg["limits"]["max_variable_usage"] == 2
        assert cfg == DEFAULTS

    def test_defaults_are_not_mutated(self, tmp_path):
        cfg = load_runtime_config(str(tmp_path))
        cfg["limits"]["max_variable_usage"] = 99

        assert DEFAULTS["limits"]["max_variable_usage"] == 2

    def test_config_file_overrides_defaults(self, tmp_path):
        _write_config(tmp_path, {"limits": {"max_variable_usage": 4}, "report": {"max_rows": 5}})

        cfg = load_runtime_config(str(tmp_path))

        assert cfg["limits"]["max_variable_usage"] == 4
        assert cfg["report"]["max_rows"] == 5

    def test_wrong_types_and_unknown_keys_are_ignored(self, tmp_path):
        _write_config(tmp_path, {"limits": {"max_variable_usage": "many", "bogus": 1}})

        cfg = load_runtime_config(str(tmp_path))

        assert cfg["limits"]["max_variable_usage"] == 2
        assert "bogus" not in cfg["limits"]

    def test_malformed_file_falls_back_to_defaults(self, tmp_path):
        pf = tmp_path / ".pf"
        pf.mkdir()
        (pf / "config.json").write_text("{not json")

        assert load_runtime_config(str(tmp_path)) == DEFAULTS

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        _write_config(tmp_path, {"limits": {"max_variable_usage": 4}})
        monkeypatch.setenv("MATCHAUDIT_LIMITS_MAX_VARIABLE_USAGE", "3")
        monkeypatch.setenv("MATCHAUDIT_SCAN_EXCLUDE", "tests/, migrations/")

        cfg = load_runtime_config(str(tmp_path))

        assert cfg["limits"]["max_variable_usage"] == 3
        assert cfg["scan"]["exclude"] == ["tests/", "migrations/"]

    def test_invalid_environment_value_keeps_previous(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MATCHAUDIT_REPORT_MAX_ROWS", "lots")

        assert load_runtime_config(str(tmp_path))["report"]["max_rows"] == 50

    def test_threshold_below_one_is_rejected(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MATCHAUDIT_LIMITS_MAX_VARIABLE_USAGE", "0")

        with pytest.raises(ConfigError):
            load_runtime_config(str(tmp_path))
