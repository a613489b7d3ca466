"""Built-in dataset used when nothing has been persisted yet."""

from __future__ import annotations

from datetime import date, datetime

from fleetmaster.models import AppState, Part, PartCategory, Vehicle, VehicleType
from fleetmaster.models._base import utcnow


def seed_vehicles(now: datetime) -> list[Vehicle]:
    return [
        Vehicle(
            id="v1",
            vehicle_number="KA-01-ME-1234",
            type=VehicleType.TRUCK,
            brand="Tata",
            model="Prima",
            year=2022,
            updated_at=now,
        ),
        Vehicle(
            id="v2",
            vehicle_number="MH-12-RS-5678",
            type=VehicleType.BUS,
            brand="Volvo",
            model="9400",
            year=2021,
            updated_at=now,
        ),
    ]


def seed_parts() -> list[Part]:
    return [
        Part(
            id="p1",
            vehicle_id="v1",
            item_number="8081010228",
            third_item_number="8081010228",
            item_description="VEHICLE/PLANT/EQUIPMENT",
            description_line2="SERVICE STICKERS",
            quantity=1,
            supplier_name="AutoHub",
            installed_date=date(2023, 12, 1),
            category=PartCategory.OTHER,
        ),
        Part(
            id="p2",
            vehicle_id="v2",
            item_number="3215060003",
            third_item_number="LF3874/LF3335",
            item_description="OIL FILTER",
            description_line2="16.5 KVA",
            quantity=1,
            supplier_name="SafeDrive",
            installed_date=date(2024, 1, 15),
            category=PartCategory.ENGINE,
        ),
    ]


def seed_state(now: datetime | None = None) -> AppState:
    """Return the first-run dataset: two vehicles, one part each.

    Seed vehicles are stamped with *now* (defaults to the current UTC time).
    """
    return AppState(vehicles=seed_vehicles(now or utcnow()), parts=seed_parts())
