from __future__ import annotations

import pytest

from fleetmaster._constants import ADVISORY_MODEL, STORAGE_KEY
from fleetmaster.config import FleetConfig
from fleetmaster.exceptions import FleetConfigError
from fleetmaster.models import Role


def test_defaults(clean_env: None) -> None:
    config = FleetConfig.from_env()

    assert config.storage_key == STORAGE_KEY
    assert config.role is Role.TECHNICIAN
    assert config.advisory_model == ADVISORY_MODEL
    assert config.gemini_api_key is None
    assert config.advisory_available is False


def test_from_env_reads_fleet_variables(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_STORAGE_PATH", "/tmp/fleet.json")
    monkeypatch.setenv("FLEET_STORAGE_KEY", "depot_a")
    monkeypatch.setenv("FLEET_ROLE", "admin")
    monkeypatch.setenv("FLEET_ADVISORY_TIMEOUT", "12.5")
    monkeypatch.setenv("FLEET_ADVISORY_ENABLED", "off")
    monkeypatch.setenv("GEMINI_API_KEY", "generic-key")

    config = FleetConfig.from_env()

    assert config.storage_path == "/tmp/fleet.json"
    assert config.storage_key == "depot_a"
    assert config.role is Role.ADMIN
    assert config.advisory_timeout == 12.5
    assert config.advisory_enabled is False
    assert config.gemini_api_key == "generic-key"
    assert config.advisory_available is False


def test_fleet_api_key_preferred_over_generic(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "generic-key")
    monkeypatch.setenv("FLEET_GEMINI_API_KEY", "fleet-key")

    config = FleetConfig.from_env()

    assert config.gemini_api_key == "fleet-key"
    assert config.advisory_available is True


def test_overrides_win_and_none_is_ignored(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_ROLE", "admin")
    monkeypatch.setenv("FLEET_STORAGE_PATH", "/tmp/env.json")

    config = FleetConfig.from_env(role="technician", storage_path=None)

    assert config.role is Role.TECHNICIAN
    assert config.storage_path == "/tmp/env.json"


def test_unknown_role_rejected(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_ROLE", "driver")

    with pytest.raises(FleetConfigError):
        FleetConfig.from_env()


def test_bad_timeout_rejected(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_ADVISORY_TIMEOUT", "soon")

    with pytest.raises(FleetConfigError):
        FleetConfig.from_env()

    with pytest.raises(FleetConfigError):
        FleetConfig(advisory_timeout=0)


def test_empty_storage_key_rejected() -> None:
    with pytest.raises(FleetConfigError):
        FleetConfig(storage_key="")
