"""Tests for runtime configuration and AuditConfig construction."""

import json
from pathlib import Path

import pytest

from featcheck.config import AuditConfig
from featcheck.config_runtime import DEFAULTS, load_runtime_config


class TestRuntimeConfig:

    def test_defaults_without_file_or_env(self, tmp_path):
        assert load_runtime_config(str(tmp_path)) == DEFAULTS

    def test_config_file_overrides_defaults(self, tmp_path):
        (tmp_path / ".featcheck").mkdir()
        (tmp_path / ".featcheck" / "config.json").write_text(json.dumps({
            "scan": {"excluded_features": ["nightly"], "backend": "rg"},
        }))
        cfg = load_runtime_config(str(tmp_path))
        assert cfg["scan"]["excluded_features"] == ["nightly"]
        assert cfg["scan"]["backend"] == "rg"
        assert cfg["scan"]["manifest_name"] == "Cargo.toml"

    def test_wrong_types_are_ignored(self, tmp_path):
        (tmp_path / ".featcheck").mkdir()
        (tmp_path / ".featcheck" / "config.json").write_text(json.dumps({
            "scan": {"excluded_features": "nightly"},
        }))
        assert load_runtime_config(str(tmp_path))["scan"]["excluded_features"] == []

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        (tmp_path / ".featcheck").mkdir()
        (tmp_path / ".featcheck" / "config.json").write_text("{not json")
        assert load_runtime_config(str(tmp_path)) == DEFAULTS

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FEATCHECK_SCAN_EXCLUDED_FEATURES", "a, b ,")
        monkeypatch.setenv("FEATCHECK_TIMEOUTS_RG_SCAN", "12")
        cfg = load_runtime_config(str(tmp_path))
        assert cfg["scan"]["excluded_features"] == ["a", "b"]
        assert cfg["timeouts"]["rg_scan"] == 12

    def test_invalid_env_value_keeps_default(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FEATCHECK_TIMEOUTS_RG_SCAN", "soon")
        assert load_runtime_config(str(tmp_path))["timeouts"]["rg_scan"] == 300


class TestAuditConfig:

    def test_independent_defaults(self):
        config = AuditConfig()
        assert config.root == Path(".")
        assert config.excluded_paths == frozenset()
        assert config.excluded_features == frozenset()
        assert not config.show_exposed
        assert not config.show_used

    def test_build_directory_is_always_excluded(self, tmp_path):
        config = AuditConfig.from_runtime(tmp_path)
        assert tmp_path / "target" in config.excluded_paths

    def test_cli_values_merge_with_config_file(self, tmp_path):
        (tmp_path / ".featcheck").mkdir()
        (tmp_path / ".featcheck" / "config.json").write_text(json.dumps({
            "scan": {"excluded_features": ["from-file"], "excluded_paths": ["vendor"]},
        }))
        config = AuditConfig.from_runtime(
            tmp_path,
            excluded_paths=["third_party"],
            excluded_features=["from-cli"],
            show_used=True,
        )
        assert config.excluded_features == {"from-file", "from-cli"}
        assert {Path("vendor"), Path("third_party")} <= config.excluded_paths
        assert config.show_used

    def test_unknown_backend_is_rejected(self):
        with pytest.raises(ValueError):
            AuditConfig(backend="grep")

    def test_report_format_defaults_to_text(self, tmp_path):
        assert AuditConfig.from_runtime(tmp_path).output_format == "text"

    def test_report_format_comes_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FEATCHECK_REPORT_FORMAT", "json")
        assert AuditConfig.from_runtime(tmp_path).output_format == "json"

    def test_report_format_from_cli_wins(self, tmp_path):
        (tmp_path / ".featcheck").mkdir()
        (tmp_path / ".featcheck" / "config.json").write_text(json.dumps({
            "report": {"format": "json"},
        }))
        assert AuditConfig.from_runtime(tmp_path).output_format == "json"
        assert AuditConfig.from_runtime(tmp_path, output_format="text").output_format == "text"

    def test_unknown_report_format_is_rejected(self):
        with pytest.raises(ValueError):
            AuditConfig(output_format="xml")
