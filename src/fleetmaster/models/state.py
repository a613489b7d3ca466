"""Application state model."""

from __future__ import annotations

from pydantic import Field

from fleetmaster.models._base import FleetBaseModel
from fleetmaster.models.part import Part
from fleetmaster.models.vehicle import Vehicle


class AppState(FleetBaseModel):
    """Both record collections, persisted together as one blob.

    Ordering is meaningful: upserts replace in place and append new
    records at the end.
    """

    vehicles: list[Vehicle] = Field(default_factory=list)
    parts: list[Part] = Field(default_factory=list)

    def to_blob(self) -> str:
        """JSON text written to the key-value slot."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_blob(cls, blob: str | bytes) -> AppState:
        """Parse a stored blob. Raises :class:`pydantic.ValidationError`."""
        return cls.model_validate_json(blob)


class DashboardStats(FleetBaseModel):
    """Register totals plus the most recently edited vehicles."""

    total_vehicles: int
    total_parts: int
    recent_vehicles: list[Vehicle] = Field(default_factory=list)
