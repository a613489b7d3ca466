"""Role-gated fleet register.

:class:`FleetRegister` owns the live :class:`AppState`. Reads are open to
every role; mutations require :attr:`Role.ADMIN` and are persisted through
the :class:`FleetStore` as soon as they are applied.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime

from fleetmaster.config import FleetConfig
from fleetmaster.exceptions import FleetPermissionError
from fleetmaster.models import AppState, DashboardStats, Part, PartCategory, Role, Vehicle, VehicleType, new_record_id
from fleetmaster.models._base import utcnow
from fleetmaster.state import reducer, views
from fleetmaster.state.store import FleetStore

_logger = logging.getLogger(__name__)


class FleetRegister:
    """Vehicles and their parts, browsable by technicians, editable by admins.

    Usage::

        register = FleetRegister(FleetStore(MemoryBackend()), role=Role.ADMIN)
        truck = register.add_vehicle(vehicle_number="KA-02", type="Truck", brand="Tata", model="Ultra", year=2024)
        register.add_part(truck.id, item_number="OF-1", item_description="OIL FILTER", installed_date="2024-05-01")
    """

    def __init__(
        self,
        store: FleetStore,
        *,
        role: Role | str = Role.TECHNICIAN,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._role = Role(role)
        self._clock = clock
        self._state = store.load()

    @classmethod
    def from_config(cls, config: FleetConfig, *, clock: Callable[[], datetime] = utcnow) -> FleetRegister:
        return cls(FleetStore.from_config(config, clock=clock), role=config.role, clock=clock)

    # ------------------------------------------------------------------
    # Role
    # ------------------------------------------------------------------

    @property
    def role(self) -> Role:
        return self._role

    @role.setter
    def role(self, value: Role | str) -> None:
        self._role = Role(value)

    @property
    def can_edit(self) -> bool:
        return self._role.can_edit

    def _require_editor(self, action: str) -> None:
        if not self.can_edit:
            raise FleetPermissionError(
                f"{self._role.value} role may not {action}",
                role=self._role.value,
                action=action,
            )

    def _commit(self, state: AppState) -> None:
        self._store.save(state)
        self._state = state

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def vehicles(self) -> list[Vehicle]:
        return list(self._state.vehicles)

    @property
    def parts(self) -> list[Part]:
        return list(self._state.parts)

    def reload(self) -> AppState:
        """Re-read the store, picking up writes made by other processes."""
        self._state = self._store.load()
        return self._state

    def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        return views.find_vehicle(self._state, vehicle_id)

    def get_part(self, part_id: str) -> Part | None:
        return views.find_part(self._state, part_id)

    def parts_for(self, vehicle_id: str) -> list[Part]:
        return views.parts_for_vehicle(self._state, vehicle_id)

    def search(self, query: str) -> list[Vehicle]:
        return views.search_vehicles(self._state, query)

    def search_parts(self, query: str) -> list[Part]:
        return views.search_parts(self._state, query)

    def stats(self) -> DashboardStats:
        return views.dashboard_stats(self._state)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def save_vehicle(self, vehicle: Vehicle) -> Vehicle:
        """Create or edit a vehicle; returns the stored (re-stamped) record."""
        self._require_editor("edit vehicles")
        state = reducer.upsert_vehicle(self._state, vehicle, now=self._clock())
        self._commit(state)
        stored = next(v for v in state.vehicles if v.id == vehicle.id)
        _logger.info("Saved vehicle %s (%s)", stored.id, stored.vehicle_number)
        return stored

    def add_vehicle(
        self,
        *,
        vehicle_number: str,
        type: VehicleType | str,
        brand: str = "",
        model: str = "",
        year: int | str,
        chassis_number: str | None = None,
        photo: str | None = None,
    ) -> Vehicle:
        """Create a vehicle with a fresh id."""
        self._require_editor("add vehicles")
        vehicle = Vehicle(
            id=new_record_id(),
            vehicle_number=vehicle_number,
            type=type,
            brand=brand,
            model=model,
            year=year,
            chassis_number=chassis_number,
            photo=photo,
            updated_at=self._clock(),
        )
        return self.save_vehicle(vehicle)

    def delete_vehicle(self, vehicle_id: str) -> None:
        """Delete a vehicle and all of its parts."""
        self._require_editor("delete vehicles")
        removed_parts = len(views.parts_for_vehicle(self._state, vehicle_id))
        self._commit(reducer.delete_vehicle(self._state, vehicle_id))
        _logger.info("Deleted vehicle %s with %d parts", vehicle_id, removed_parts)

    def save_part(self, part: Part) -> Part:
        """Create or edit a part. Its vehicle must exist."""
        self._require_editor("edit parts")
        self._commit(reducer.upsert_part(self._state, part))
        _logger.info("Saved part %s on vehicle %s", part.id, part.vehicle_id)
        return part

    def add_part(
        self,
        vehicle_id: str,
        *,
        item_number: str = "",
        third_item_number: str = "",
        item_description: str = "",
        description_line2: str = "",
        quantity: int | str = 1,
        supplier_name: str = "",
        installed_date: date | str | None = None,
        category: PartCategory | str = PartCategory.OTHER,
    ) -> Part:
        """Create a part with a fresh id; ``installed_date`` defaults to today."""
        self._require_editor("add parts")
        part = Part(
            id=new_record_id(),
            vehicle_id=vehicle_id,
            item_number=item_number,
            third_item_number=third_item_number,
            item_description=item_description,
            description_line2=description_line2,
            quantity=quantity,
            supplier_name=supplier_name,
            installed_date=installed_date or self._clock().date(),
            category=category,
        )
        return self.save_part(part)

    def delete_part(self, part_id: str) -> None:
        self._require_editor("delete parts")
        self._commit(reducer.delete_part(self._state, part_id))
        _logger.info("Deleted part %s", part_id)

    def reset(self) -> AppState:
        """Drop the persisted state and start over from the seed dataset."""
        self._require_editor("reset the register")
        self._store.clear()
        return self.reload()
