"""Custom exception hierarchy for fleetmaster."""

from __future__ import annotations


class FleetError(Exception):
    """Base exception for all fleetmaster errors."""


class FleetConfigError(FleetError):
    """Invalid or missing configuration."""


class FleetStorageError(FleetError):
    """The key-value slot could not be written."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class FleetPermissionError(FleetError):
    """A mutation was attempted by a role that may only browse.

    Technicians can search and read the register; only admins edit it.
    """

    def __init__(self, message: str, *, role: str = "", action: str = "") -> None:
        self.role = role
        self.action = action
        super().__init__(message)


class FleetIntegrityError(FleetError):
    """A record would break referential consistency.

    Raised when a part points at a vehicle id that is not in the register.
    """

    def __init__(self, message: str, *, record_id: str = "", vehicle_id: str = "") -> None:
        self.record_id = record_id
        self.vehicle_id = vehicle_id
        super().__init__(message)


class FleetAdvisoryError(FleetError):
    """Advisory service call failed (network, non-200, unusable body).

    The advisory client catches this internally and returns its fallback
    value; callers of the public API never see it.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
