"""Data models for the fleet register."""

from fleetmaster.models._base import FleetBaseModel, new_record_id
from fleetmaster.models.advice import PartSuggestion
from fleetmaster.models.part import Part, PartCategory
from fleetmaster.models.role import Role
from fleetmaster.models.state import AppState, DashboardStats
from fleetmaster.models.vehicle import Vehicle, VehicleType

__all__ = [
    "AppState",
    "DashboardStats",
    "FleetBaseModel",
    "Part",
    "PartCategory",
    "PartSuggestion",
    "Role",
    "Vehicle",
    "VehicleType",
    "new_record_id",
]
