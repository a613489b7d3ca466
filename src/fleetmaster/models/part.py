"""Maintenance part model."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator

from fleetmaster._normalize import safe_int
from fleetmaster.models._base import FleetBaseModel


class PartCategory(StrEnum):
    ENGINE = "Engine"
    ELECTRICAL = "Electrical"
    BODY = "Body"
    TYRE = "Tyre"
    OTHER = "Other"


class Part(FleetBaseModel):
    """A maintenance part installed on a vehicle.

    ``vehicle_id`` must reference a vehicle in the same register;
    deleting that vehicle deletes the part.
    """

    id: str = Field(min_length=1)
    vehicle_id: str = Field(min_length=1)
    item_number: str = ""
    third_item_number: str = ""
    """Alternate / cross-reference item number (e.g. ``"LF3874/LF3335"``)."""
    item_description: str = ""
    description_line2: str = ""
    quantity: int = Field(default=1, ge=0)
    supplier_name: str = ""
    installed_date: date
    category: PartCategory = PartCategory.OTHER

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> Any:
        parsed = safe_int(value)
        return value if parsed is None else parsed

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on item numbers and descriptions."""
        haystacks = (self.item_number, self.third_item_number, self.item_description, self.description_line2)
        return any(needle in text.lower() for text in haystacks)
