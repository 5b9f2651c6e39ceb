"""Tests for layered settings and their consumers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from buildcarbon.carbon.engine import CarbonEngine
from buildcarbon.library.catalog import MaterialCatalog
from buildcarbon.settings import (
    Settings,
    SettingsManager,
    apply_log_level,
    env_key,
    field_for_key,
    parse_env_lines,
)
from buildcarbon.taxonomy.tree import tree_from_settings


def _write_json(root: Path, data: object) -> None:
    (root / ".buildcarbon").mkdir(exist_ok=True)
    (root / ".buildcarbon" / "config.json").write_text(json.dumps(data))


# ── Settings model ───────────────────────────────────────────────────────────

class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.decimals == 3
        assert settings.chart_height == 200.0
        assert settings.uncategorized_label == "Uncategorized"
        assert settings.log_level_number == logging.INFO

    def test_log_level_normalised(self):
        assert Settings(log_level="warning").log_level == "WARNING"
        with pytest.raises(ValidationError):
            Settings(log_level="loud")

    def test_bounds(self):
        with pytest.raises(ValidationError):
            Settings(decimals=-1)
        with pytest.raises(ValidationError):
            Settings(chart_height=0)
        with pytest.raises(ValidationError):
            Settings(uncategorized_label="")

    def test_keys(self):
        assert env_key("chart_height") == "BUILDCARBON_CHART_HEIGHT"
        assert field_for_key("BUILDCARBON_DECIMALS") == "decimals"
        assert field_for_key("decimals") == "decimals"
        assert field_for_key("BUILDCARBON_UNKNOWN") is None


class TestParseEnvLines:

    def test_comments_quotes_and_export(self):
        values = parse_env_lines([
            "# comment",
            "",
            "BUILDCARBON_DECIMALS = 4",
            "export BUILDCARBON_UNCATEGORIZED_LABEL='Other items'",
            "not a setting",
        ])
        assert values == {
            "BUILDCARBON_DECIMALS": "4",
            "BUILDCARBON_UNCATEGORIZED_LABEL": "Other items",
        }


# ── SettingsManager ──────────────────────────────────────────────────────────

class TestSettingsManager:

    def test_defaults_use_development_profile(self, tmp_path: Path):
        settings = SettingsManager(environ={}).load(tmp_path)
        assert settings.env == "development"
        assert settings.log_level == "DEBUG"
        assert settings.decimals == 3

    def test_profile_from_environment(self, tmp_path: Path):
        settings = SettingsManager(environ={"BUILDCARBON_ENV": "production"}).load(tmp_path)
        assert settings.log_level == "WARNING"

    def test_profile_from_env_file(self, tmp_path: Path):
        (tmp_path / ".env").write_text("BUILDCARBON_ENV=production\n")
        settings = SettingsManager(environ={}).load(tmp_path)
        assert settings.env == "production"
        assert settings.log_level == "WARNING"

    def test_json_field_names_and_coercion(self, tmp_path: Path):
        _write_json(tmp_path, {"chart_height": 300, "BUILDCARBON_DECIMALS": "2", "colour": "red"})
        settings = SettingsManager(environ={}).load(tmp_path)
        assert settings.chart_height == 300.0
        assert settings.decimals == 2

    def test_precedence(self, tmp_path: Path):
        _write_json(tmp_path, {"decimals": 2, "log_level": "ERROR"})
        (tmp_path / ".env").write_text("BUILDCARBON_DECIMALS=4\n")
        settings = SettingsManager(environ={"BUILDCARBON_DECIMALS": "5"}).load(tmp_path)
        assert settings.decimals == 5
        assert settings.log_level == "ERROR"

    def test_reads_process_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BUILDCARBON_CHART_HEIGHT", "150")
        assert SettingsManager().load(tmp_path).chart_height == 150.0

    def test_invalid_value_falls_back(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        environ = {"BUILDCARBON_CHART_HEIGHT": "oops", "BUILDCARBON_DECIMALS": "4"}
        with caplog.at_level(logging.WARNING, logger="buildcarbon.settings"):
            settings = SettingsManager(environ=environ).load(tmp_path)
        assert settings.chart_height == 200.0
        assert settings.decimals == 4
        assert "BUILDCARBON_CHART_HEIGHT" in caplog.text

    def test_corrupt_json_ignored(self, tmp_path: Path):
        (tmp_path / ".buildcarbon").mkdir()
        (tmp_path / ".buildcarbon" / "config.json").write_text("{not json")
        assert SettingsManager(environ={}).load(tmp_path).chart_height == 200.0

    def test_non_object_json_ignored(self, tmp_path: Path):
        _write_json(tmp_path, [1, 2])
        assert SettingsManager(environ={}).load(tmp_path).decimals == 3

    def test_unknown_profile(self, tmp_path: Path):
        settings = SettingsManager(environ={"BUILDCARBON_ENV": "staging"}).load(tmp_path)
        assert settings.env == "staging"
        assert settings.log_level == "INFO"

    def test_generate_env_template(self, tmp_path: Path):
        path = SettingsManager().generate_env_template(tmp_path)
        content = path.read_text()
        assert path.name == ".env.example"
        assert "BUILDCARBON_DECIMALS=3" in content
        assert "BUILDCARBON_UNCATEGORIZED_LABEL=Uncategorized" in content
        assert "# Contribution chart height" in content

    def test_template_loads_back(self, tmp_path: Path):
        path = SettingsManager().generate_env_template(tmp_path)
        path.rename(tmp_path / ".env")
        assert SettingsManager(environ={}).load(tmp_path) == Settings()

    def test_list_keys(self):
        keys = SettingsManager().list_keys()
        assert set(keys) == {
            "BUILDCARBON_ENV",
            "BUILDCARBON_LOG_LEVEL",
            "BUILDCARBON_DECIMALS",
            "BUILDCARBON_CHART_HEIGHT",
            "BUILDCARBON_UNCATEGORIZED_LABEL",
        }


# ── Consumers ────────────────────────────────────────────────────────────────

class TestConsumers:

    def test_engine_from_settings(self, tmp_path: Path):
        (tmp_path / ".env").write_text("BUILDCARBON_DECIMALS=2\nBUILDCARBON_CHART_HEIGHT=oops\n")
        engine = CarbonEngine.from_settings(MaterialCatalog(), SettingsManager(environ={}).load(tmp_path))
        assert engine.decimals == 2
        assert engine.chart_height == 200.0

    def test_tree_from_settings(self, tmp_path: Path):
        (tmp_path / ".env").write_text("BUILDCARBON_UNCATEGORIZED_LABEL=Other\n")
        root = tree_from_settings(SettingsManager(environ={}).load(tmp_path))
        assert root.uncategorized.label == "Other"
        assert list(root.children)[-1] == "Other"
        assert "2 Super structure" in root.children

    def test_apply_log_level(self):
        logger = logging.getLogger("buildcarbon")
        previous = logger.level
        try:
            assert apply_log_level(Settings(log_level="warning")) == logging.WARNING
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(previous)
