"""Read-only, filtered views over the register state."""

from __future__ import annotations

from fleetmaster._constants import RECENT_VEHICLES_LIMIT
from fleetmaster.models import AppState, DashboardStats, Part, Vehicle


def find_vehicle(state: AppState, vehicle_id: str) -> Vehicle | None:
    return next((v for v in state.vehicles if v.id == vehicle_id), None)


def find_part(state: AppState, part_id: str) -> Part | None:
    return next((p for p in state.parts if p.id == part_id), None)


def parts_for_vehicle(state: AppState, vehicle_id: str) -> list[Part]:
    """Parts installed on *vehicle_id*, in register order."""
    return [p for p in state.parts if p.vehicle_id == vehicle_id]


def search_vehicles(state: AppState, query: str) -> list[Vehicle]:
    """Quick search by vehicle number, brand, or model.

    Matching is a case-insensitive substring test. A blank query matches
    nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        v
        for v in state.vehicles
        if needle in v.vehicle_number.lower() or needle in v.brand.lower() or needle in v.model.lower()
    ]


def search_parts(state: AppState, query: str) -> list[Part]:
    """Search parts by item numbers and description lines."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [p for p in state.parts if p.matches(needle)]


def recent_vehicles(state: AppState, limit: int = RECENT_VEHICLES_LIMIT) -> list[Vehicle]:
    """Most recently edited vehicles, newest first."""
    if limit <= 0:
        return []
    return sorted(state.vehicles, key=lambda v: v.updated_at, reverse=True)[:limit]


def dashboard_stats(state: AppState, *, recent: int = RECENT_VEHICLES_LIMIT) -> DashboardStats:
    return DashboardStats(
        total_vehicles=len(state.vehicles),
        total_parts=len(state.parts),
        recent_vehicles=recent_vehicles(state, recent),
    )
