"""Tests for config/loader.py and config/settings.py.

Tests for preset discovery, preset application, and settings defaults.
"""

from pathlib import Path

import pydantic
import pytest
import yaml
from burncalc.config.loader import ConfigLoader, get_config_path, load_config
from burncalc.config.settings import Settings, get_settings
from burncalc.core.errors import ConfigurationError
from burncalc.slos.models import AlertType
from burncalc.slos.units import WindowUnit


def write_preset(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def preset(tmp_path):
    return write_preset(
        tmp_path / "preset.yaml",
        {
            "session": {
                "sliDescription": "Checkout success ratio",
                "slo": 99.95,
                "windowDays": 28,
                "totalEvents": "2,500,000",
                "collectionFreq": "30s",
            },
            "alerts": [
                {
                    "id": "fast",
                    "label": "Fast burn",
                    "type": "page",
                    "longWindowValue": 1,
                    "longWindowUnit": "hours",
                    "budgetConsumed": 2,
                },
                {
                    "id": "slow",
                    "type": "ticket",
                    "longWindowValue": 3,
                    "longWindowUnit": "days",
                    "budgetConsumed": 10.5,
                },
            ],
        },
    )


class TestSettings:
    """Tests for environment-based settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.slo == 99.9
        assert settings.window_days == 30
        assert settings.total_events == 1_000_000
        assert settings.collection_freq == "1m"
        assert settings.config_path is None
        assert settings.log_level == "WARNING"
        assert settings.log_json is True

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("BURNCALC_SLO", "99.5")
        monkeypatch.setenv("BURNCALC_WINDOW_DAYS", "7")

        settings = Settings()

        assert settings.slo == 99.5
        assert settings.window_days == 7

    def test_zero_window_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(window_days=0)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestGetConfigPath:
    """Tests for preset discovery."""

    def test_explicit_path(self, preset):
        assert get_config_path(preset) == preset

    def test_explicit_missing_path_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            get_config_path(tmp_path / "missing.yaml")

    def test_project_preset(self, tmp_path):
        path = write_preset(tmp_path / ".burncalc" / "config.yaml", {})

        assert get_config_path() == path

    def test_home_preset(self, tmp_path):
        path = write_preset(tmp_path / "home" / ".burncalc" / "config.yaml", {})

        assert get_config_path() == path

    def test_no_preset(self):
        assert get_config_path() is None


class TestConfigLoader:
    """Tests for building session and alerts from a preset."""

    def test_defaults_without_preset(self):
        session, alerts = ConfigLoader(settings=Settings()).load()

        assert session.slo == 99.9
        assert [a.id for a in alerts] == ["p1", "p2", "ticket"]

    def test_settings_seed_session(self):
        session, _ = ConfigLoader(settings=Settings(slo=99.0, total_events=100)).load()

        assert session.slo == 99.0
        assert session.allowed_failures == 1

    def test_session_section(self, preset):
        session, _ = ConfigLoader(preset, settings=Settings()).load()

        assert session.sli_description == "Checkout success ratio"
        assert session.slo == 99.95
        assert session.window_days == 28
        assert session.total_events == 2_500_000
        assert session.collection_freq.value == "30s"

    def test_alerts_section(self, preset):
        _, alerts = ConfigLoader(preset, settings=Settings()).load()

        assert [a.id for a in alerts] == ["fast", "slow"]
        fast = alerts.get_alert("fast")
        assert fast.label == "Fast burn"
        assert fast.long_window_unit == WindowUnit.HOURS
        assert fast.budget_consumed == 2
        slow = alerts.get_alert("slow")
        assert slow.label == "slow"
        assert slow.type == AlertType.TICKET
        assert slow.long_window_value == 3
        assert slow.budget_consumed == 10.5

    def test_missing_alerts_section_uses_defaults(self, tmp_path):
        path = write_preset(tmp_path / "p.yaml", {"session": {"slo": 99.0}})

        _, alerts = ConfigLoader(path, settings=Settings()).load()

        assert len(alerts) == 3

    def test_load_config_helper(self, preset):
        session, alerts = load_config(preset)

        assert session.window_days == 28
        assert len(alerts) == 2

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {"session": {"slo": 101}},
            {"session": {"slo": "high"}},
            {"session": {"windowDays": 0}},
            {"session": {"totalEvents": "lots"}},
            {"alerts": {"id": "p1"}},
            {"alerts": [{"label": "no id"}]},
            {"alerts": [{"id": "a", "type": "email"}]},
            {"alerts": [{"id": "a"}, {"id": "a"}]},
            {"alerts": [{"id": "a", "budgetConsumed": 150}]},
            {"alerts": [{"id": "a", "longWindowValue": 1000}]},
            {"alerts": [{"id": "a", "longWindowUnit": "weeks"}]},
        ],
    )
    def test_invalid_preset_raises(self, tmp_path, data):
        path = write_preset(tmp_path / "bad.yaml", data)

        with pytest.raises(ConfigurationError):
            ConfigLoader(path, settings=Settings()).load()

    def test_malformed_yaml_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("session: [unclosed")

        with pytest.raises(ConfigurationError, match="Failed to read"):
            ConfigLoader(path, settings=Settings()).load()
