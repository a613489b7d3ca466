"""Pure record operations over :class:`AppState`.

Each function returns a new state and never mutates its input; the
caller decides when to persist the result.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, TypeVar

from fleetmaster.exceptions import FleetIntegrityError
from fleetmaster.models import AppState, Part, Vehicle
from fleetmaster.models._base import ensure_aware, utcnow


class _Identified(Protocol):
    @property
    def id(self) -> str:
        ...


R = TypeVar("R", bound=_Identified)


def _replace_or_append(records: Sequence[R], record: R) -> list[R]:
    """Replace the record with the same id in place, or append it."""
    result = list(records)
    for index, existing in enumerate(result):
        if existing.id == record.id:
            result[index] = record
            return result
    result.append(record)
    return result


def upsert_vehicle(state: AppState, vehicle: Vehicle, *, now: datetime | None = None) -> AppState:
    """Insert or update *vehicle* keyed by id, stamping ``updated_at``."""
    stamped = vehicle.model_copy(update={"updated_at": ensure_aware(now) if now is not None else utcnow()})
    return state.model_copy(update={"vehicles": _replace_or_append(state.vehicles, stamped)})


def delete_vehicle(state: AppState, vehicle_id: str) -> AppState:
    """Remove a vehicle and every part installed on it."""
    return state.model_copy(
        update={
            "vehicles": [v for v in state.vehicles if v.id != vehicle_id],
            "parts": [p for p in state.parts if p.vehicle_id != vehicle_id],
        }
    )


def upsert_part(state: AppState, part: Part) -> AppState:
    """Insert or update *part* keyed by id.

    Raises :class:`FleetIntegrityError` if ``part.vehicle_id`` is not a
    vehicle in *state*.
    """
    if not any(v.id == part.vehicle_id for v in state.vehicles):
        raise FleetIntegrityError(
            f"part {part.id!r} references unknown vehicle {part.vehicle_id!r}",
            record_id=part.id,
            vehicle_id=part.vehicle_id,
        )
    return state.model_copy(update={"parts": _replace_or_append(state.parts, part)})


def delete_part(state: AppState, part_id: str) -> AppState:
    return state.model_copy(update={"parts": [p for p in state.parts if p.id != part_id]})
