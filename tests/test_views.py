from __future__ import annotations

from datetime import timedelta

from fleetmaster.models import AppState
from fleetmaster.state import views
from fleetmaster.state.seed import seed_state

from .factories import FIXED_NOW, make_part, make_vehicle


def test_parts_for_vehicle_keeps_register_order(three_vehicle_state: AppState) -> None:
    assert [p.id for p in views.parts_for_vehicle(three_vehicle_state, "a")] == ["pa1", "pa2"]
    assert views.parts_for_vehicle(three_vehicle_state, "c") == []


def test_find_vehicle_and_part(three_vehicle_state: AppState) -> None:
    vehicle = views.find_vehicle(three_vehicle_state, "b")
    assert vehicle is not None
    assert vehicle.id == "b"
    assert views.find_vehicle(three_vehicle_state, "nope") is None

    part = views.find_part(three_vehicle_state, "pb1")
    assert part is not None
    assert part.vehicle_id == "b"
    assert views.find_part(three_vehicle_state, "nope") is None


def test_search_vehicles_matches_number_brand_and_model_case_insensitively() -> None:
    state = seed_state(FIXED_NOW)

    assert [v.id for v in views.search_vehicles(state, "ka-01")] == ["v1"]
    assert [v.id for v in views.search_vehicles(state, "VOLVO")] == ["v2"]
    assert [v.id for v in views.search_vehicles(state, "prima")] == ["v1"]
    assert [v.id for v in views.search_vehicles(state, "-12-")] == ["v2"]


def test_search_vehicles_blank_query_matches_nothing() -> None:
    state = seed_state(FIXED_NOW)

    assert views.search_vehicles(state, "") == []
    assert views.search_vehicles(state, "   ") == []


def test_search_parts() -> None:
    state = seed_state(FIXED_NOW)

    assert [p.id for p in views.search_parts(state, "lf3874")] == ["p2"]
    assert [p.id for p in views.search_parts(state, "stickers")] == ["p1"]
    assert views.search_parts(state, "") == []


def test_dashboard_stats_recent_vehicles_newest_first() -> None:
    state = AppState(
        vehicles=[
            make_vehicle("old", updated_at=FIXED_NOW),
            make_vehicle("newest", updated_at=FIXED_NOW + timedelta(days=3)),
            make_vehicle("mid", updated_at=FIXED_NOW + timedelta(days=1)),
            make_vehicle("newer", updated_at=FIXED_NOW + timedelta(days=2)),
        ],
        parts=[make_part("p", "old")],
    )

    stats = views.dashboard_stats(state)

    assert stats.total_vehicles == 4
    assert stats.total_parts == 1
    assert [v.id for v in stats.recent_vehicles] == ["newest", "newer", "mid"]


def test_recent_vehicles_limit() -> None:
    state = seed_state(FIXED_NOW)

    assert views.recent_vehicles(state, 0) == []
    assert len(views.recent_vehicles(state, 10)) == 2
    assert views.dashboard_stats(AppState()).recent_vehicles == []
