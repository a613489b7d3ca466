"""Register configuration for fleetmaster."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from fleetmaster._constants import ADVISORY_BASE_URL, ADVISORY_MODEL, DEFAULT_STORAGE_PATH, STORAGE_KEY
from fleetmaster.exceptions import FleetConfigError
from fleetmaster.models.role import Role


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class FleetConfig:
    """Register configuration.

    Parameters
    ----------
    storage_path : str
        File holding the key-value slot. ``~`` is expanded.
    storage_key : str
        Key under which the application state blob is stored.
    role : Role
        Role the register is opened with. Technicians browse only;
        admins may edit.
    gemini_api_key : str or None
        API key for the maintenance advisory service. Without a key the
        advisory client always returns its fallback values.
    advisory_enabled : bool
        Master switch for advisory lookups.
    advisory_model : str
        Generation model name.
    advisory_base_url : str
        Base URL of the generation REST API.
    advisory_timeout : float
        Total request timeout in seconds for one advisory call.
    """

    storage_path: str = DEFAULT_STORAGE_PATH
    storage_key: str = STORAGE_KEY
    role: Role = Role.TECHNICIAN
    gemini_api_key: str | None = None
    advisory_enabled: bool = True
    advisory_model: str = ADVISORY_MODEL
    advisory_base_url: str = ADVISORY_BASE_URL
    advisory_timeout: float = 30.0

    def __post_init__(self) -> None:
        try:
            role = Role(self.role)
        except ValueError as exc:
            raise FleetConfigError(f"unknown role {self.role!r}; expected one of {[r.value for r in Role]}") from exc
        object.__setattr__(self, "role", role)
        if not self.storage_key:
            raise FleetConfigError("storage_key must be non-empty")
        if self.advisory_timeout <= 0:
            raise FleetConfigError(f"advisory_timeout must be positive, got {self.advisory_timeout}")

    @property
    def advisory_available(self) -> bool:
        """Whether advisory lookups can reach the service at all."""
        return self.advisory_enabled and bool(self.gemini_api_key)

    @classmethod
    def from_env(cls, **overrides: Any) -> FleetConfig:
        """Create configuration from environment variables.

        Reads the optional ``FLEET_*`` variables; the API key falls back to
        ``GEMINI_API_KEY``. Explicit keyword arguments override environment
        values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        FleetConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "FLEET_STORAGE_PATH": "storage_path",
            "FLEET_STORAGE_KEY": "storage_key",
            "FLEET_ROLE": "role",
            "FLEET_ADVISORY_MODEL": "advisory_model",
            "FLEET_ADVISORY_BASE_URL": "advisory_base_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        api_key = env.get("FLEET_GEMINI_API_KEY") or env.get("GEMINI_API_KEY")
        if api_key:
            config_kwargs["gemini_api_key"] = api_key

        if "advisory_enabled" not in overrides:
            config_kwargs["advisory_enabled"] = _env_bool(env.get("FLEET_ADVISORY_ENABLED"), True)

        # advisory_timeout is numeric, handle separately
        timeout_env = env.get("FLEET_ADVISORY_TIMEOUT")
        if timeout_env is not None and "advisory_timeout" not in overrides:
            try:
                config_kwargs["advisory_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise FleetConfigError(f"FLEET_ADVISORY_TIMEOUT must be a number, got {timeout_env!r}") from exc

        config_kwargs.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**config_kwargs)
