"""Vehicle model."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import Field, field_validator

from fleetmaster._normalize import is_blank, safe_int
from fleetmaster.models._base import FleetBaseModel, ensure_aware, utcnow


class VehicleType(StrEnum):
    CAR = "Car"
    TRUCK = "Truck"
    BUS = "Bus"
    EQUIPMENT = "Equipment"


class Vehicle(FleetBaseModel):
    """A vehicle in the fleet register.

    ``id`` is assigned once on creation and never changes; edits go
    through :func:`fleetmaster.state.reducer.upsert_vehicle`, which also
    refreshes ``updated_at``.
    """

    _BLANK_RULES: ClassVar[dict[str, Callable[[Any], bool]]] = {
        "chassis_number": is_blank,
        "photo": is_blank,
    }

    id: str = Field(min_length=1)
    """Register identifier."""
    vehicle_number: str
    """Registration plate (e.g. ``"KA-01-ME-1234"``)."""
    type: VehicleType
    """Vehicle class."""
    brand: str = ""
    """Manufacturer (e.g. ``"Tata"``)."""
    model: str = ""
    """Model name (e.g. ``"Prima"``)."""
    year: int
    """Model year."""
    chassis_number: str | None = None
    """Chassis / VIN, when known."""
    photo: str | None = None
    """Base64 data URL or plain URL of a photo."""
    updated_at: datetime = Field(default_factory=utcnow)
    """Last edit time (UTC)."""

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.brand, self.model) if part)

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, value: Any) -> Any:
        parsed = safe_int(value)
        return value if parsed is None else parsed

    @field_validator("updated_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)
