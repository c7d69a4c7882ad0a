"""
Preset file loading.

A preset seeds a fresh session and alert set from YAML. Presets are only
read, never written back.

Search order:
1. Explicit path (--config flag or BURNCALC_CONFIG_PATH)
2. .burncalc/config.yaml (project root)
3. ~/.burncalc/config.yaml (user home)
4. Built-in defaults

Example::

    session:
      sliDescription: Successful checkout requests at the load balancer
      slo: 99.95
      windowDays: 28
      totalEvents: "2,500,000"
    alerts:
      - id: fast
        label: Fast burn
        type: page
        longWindowValue: 1
        longWindowUnit: hours
        budgetConsumed: 2
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml

from burncalc.config.settings import Settings, get_settings
from burncalc.core.errors import ConfigurationError, ValidationError
from burncalc.slos.alerts import AlertSet
from burncalc.slos.models import AlertConfig, AlertField, AlertType, UpdateResult
from burncalc.slos.session import SloSession
from burncalc.slos.units import WindowUnit

logger = structlog.get_logger()


def get_config_path(explicit_path: str | Path | None = None) -> Path | None:
    """
    Find the preset file to use.

    Returns:
        Path to preset file or None if not found
    """
    if explicit_path:
        path = Path(explicit_path)
        if path.exists():
            return path
        raise ConfigurationError("Preset file not found", details={"path": str(path)})

    cwd_config = Path.cwd() / ".burncalc" / "config.yaml"
    if cwd_config.exists():
        return cwd_config

    home_config = Path.home() / ".burncalc" / "config.yaml"
    if home_config.exists():
        return home_config

    return None


def _check(result: UpdateResult, where: str) -> None:
    if not result:
        raise ConfigurationError(f"Invalid preset value for {where}", details={"reason": result.reason})


class ConfigLoader:
    """
    Builds a session and alert set from settings plus an optional preset.
    """

    def __init__(self, config_path: Path | None = None, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.config_path = config_path or get_config_path(self.settings.config_path)

    def load(self) -> tuple[SloSession, AlertSet]:
        """Load preset from file or return settings-based defaults."""
        try:
            session = SloSession.from_settings(self.settings)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e.message}") from e

        if not self.config_path:
            return session, AlertSet(session)

        data = self._read(self.config_path)
        self._apply_session(session, data.get("session") or {})
        alerts = self._build_alerts(session, data.get("alerts"))

        logger.debug("loaded_config", path=str(self.config_path), alerts=len(alerts))
        return session, alerts

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                "Failed to read preset file", details={"path": str(path), "error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError("Preset file must be a mapping", details={"path": str(path)})
        return data

    def _apply_session(self, session: SloSession, data: dict[str, Any]) -> None:
        if "sliDescription" in data:
            session.set_sli_description(str(data["sliDescription"]))
        if "slo" in data:
            _check(session.set_slo(_as_float(data["slo"], "session.slo")), "session.slo")
        if "windowDays" in data:
            _check(session.set_window_days(data["windowDays"]), "session.windowDays")
        if "totalEvents" in data:
            _check(session.set_total_events_text(str(data["totalEvents"])), "session.totalEvents")
        if "collectionFreq" in data:
            _check(session.set_collection_freq(str(data["collectionFreq"])), "session.collectionFreq")

    def _build_alerts(self, session: SloSession, data: list[dict[str, Any]] | None) -> AlertSet:
        if data is None:
            return AlertSet(session)
        if not isinstance(data, list):
            raise ConfigurationError("'alerts' must be a list")

        seeds = []
        for i, entry in enumerate(data):
            if not isinstance(entry, dict) or "id" not in entry:
                raise ConfigurationError(f"alerts[{i}] must be a mapping with an 'id'")
            try:
                alert_type = AlertType(entry.get("type", AlertType.PAGE.value))
            except ValueError as e:
                raise ConfigurationError(f"alerts[{i}].type is not page or ticket") from e
            seeds.append(
                AlertConfig(
                    id=str(entry["id"]),
                    label=str(entry.get("label", entry["id"])),
                    type=alert_type,
                    long_window_value=1,
                    long_window_unit=WindowUnit.HOURS,
                    budget_consumed=0,
                )
            )

        try:
            alerts = AlertSet(session, seeds)
        except ValidationError as e:
            raise ConfigurationError(e.message, details=e.details) from e

        # Numeric fields go through the same validation as interactive edits
        for entry in data:
            for field in AlertField:
                if field.value in entry:
                    result = alerts.update_alert(str(entry["id"]), field, str(entry[field.value]))
                    _check(result, f"alerts.{entry['id']}.{field.value}")

        return alerts


def _as_float(value: Any, where: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid preset value for {where}", details={"value": value}) from e


def load_config(path: str | Path | None = None) -> tuple[SloSession, AlertSet]:
    """Convenience function to build a session and alert set."""
    return ConfigLoader(Path(path) if path else None).load()


__all__ = ["ConfigLoader", "get_config_path", "load_config"]
