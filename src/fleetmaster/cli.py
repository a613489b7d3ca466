"""Command-line browser/editor for the fleet register.

Usage
-----
::

    fleetmaster vehicles
    fleetmaster search prima
    fleetmaster parts v1
    fleetmaster --role admin add-vehicle KA-02-XY-0001 --type Truck --brand Tata --model Ultra --year 2024
    fleetmaster --role admin add-part v1 --item-number 3215060003 --description "OIL FILTER" --category Engine
    fleetmaster --role admin delete-vehicle v2
    fleetmaster advice "Oil filter" "Volvo 9400"

Global options::

    --storage FILE     Storage file (default: $FLEET_STORAGE_PATH or ~/.fleetmaster/storage.json)
    --role ROLE        technician (read-only, default) or admin
    --json             Machine-readable output
    -v, --verbose      Debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from fleetmaster.advisory import AdvisoryClient
from fleetmaster.config import FleetConfig
from fleetmaster.exceptions import FleetError, FleetIntegrityError, FleetPermissionError
from fleetmaster.models import FleetBaseModel, Part, PartCategory, Role, Vehicle, VehicleType
from fleetmaster.register import FleetRegister

_logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_DENIED = 2
EXIT_NOT_FOUND = 3


# ── output helpers ───────────────────────────────────────────


def _emit_json(payload: Any) -> None:
    if isinstance(payload, FleetBaseModel):
        payload = payload.to_record()
    elif isinstance(payload, list):
        payload = [p.to_record() if isinstance(p, FleetBaseModel) else p for p in payload]
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _vehicle_line(v: Vehicle) -> str:
    chassis = f"  chassis={v.chassis_number}" if v.chassis_number else ""
    return (
        f"{v.id:<10} {v.vehicle_number:<16} {v.type.value:<10} {v.display_name:<24} {v.year}"
        f"  updated={v.updated_at:%Y-%m-%d %H:%M}{chassis}"
    )


def _part_line(p: Part) -> str:
    return (
        f"{p.id:<10} {p.vehicle_id:<10} {p.item_number:<12} {p.third_item_number:<16} "
        f"{p.item_description} / {p.description_line2}  x{p.quantity}  "
        f"{p.category.value}  {p.supplier_name}  {p.installed_date.isoformat()}"
    )


def _print_vehicles(vehicles: Sequence[Vehicle], *, as_json: bool) -> None:
    if as_json:
        _emit_json(list(vehicles))
        return
    if not vehicles:
        print("No vehicles found.")
    for v in vehicles:
        print(_vehicle_line(v))


def _print_parts(parts: Sequence[Part], *, as_json: bool) -> None:
    if as_json:
        _emit_json(list(parts))
        return
    if not parts:
        print("No parts recorded.")
    for p in parts:
        print(_part_line(p))


# ── commands ─────────────────────────────────────────────────


def _cmd_vehicles(register: FleetRegister, args: argparse.Namespace) -> int:
    _print_vehicles(register.vehicles, as_json=args.json)
    return EXIT_OK


def _cmd_parts(register: FleetRegister, args: argparse.Namespace) -> int:
    if args.vehicle_id is None:
        _print_parts(register.parts, as_json=args.json)
        return EXIT_OK
    if register.get_vehicle(args.vehicle_id) is None:
        print(f"Unknown vehicle: {args.vehicle_id}", file=sys.stderr)
        return EXIT_NOT_FOUND
    _print_parts(register.parts_for(args.vehicle_id), as_json=args.json)
    return EXIT_OK


def _cmd_search(register: FleetRegister, args: argparse.Namespace) -> int:
    if args.parts:
        _print_parts(register.search_parts(args.query), as_json=args.json)
    else:
        _print_vehicles(register.search(args.query), as_json=args.json)
    return EXIT_OK


def _cmd_stats(register: FleetRegister, args: argparse.Namespace) -> int:
    stats = register.stats()
    if args.json:
        _emit_json(stats)
        return EXIT_OK
    print(f"Vehicles: {stats.total_vehicles}")
    print(f"Parts:    {stats.total_parts}")
    print("Recent updates:")
    for v in stats.recent_vehicles:
        print(f"  {_vehicle_line(v)}")
    return EXIT_OK


def _cmd_add_vehicle(register: FleetRegister, args: argparse.Namespace) -> int:
    if args.id:
        existing = register.get_vehicle(args.id)
        if existing is None:
            print(f"Unknown vehicle: {args.id}", file=sys.stderr)
            return EXIT_NOT_FOUND
        changes = {
            "vehicle_number": args.vehicle_number,
            "type": args.type,
            "brand": args.brand,
            "model": args.model,
            "year": args.year,
            "chassis_number": args.chassis,
        }
        update = {k: v for k, v in changes.items() if v is not None}
        vehicle = register.save_vehicle(Vehicle.model_validate({**existing.model_dump(), **update}))
    else:
        vehicle = register.add_vehicle(
            vehicle_number=args.vehicle_number,
            type=args.type,
            brand=args.brand or "",
            model=args.model or "",
            year=args.year,
            chassis_number=args.chassis,
        )
    _print_vehicles([vehicle], as_json=args.json)
    return EXIT_OK


def _cmd_add_part(register: FleetRegister, args: argparse.Namespace) -> int:
    part = register.add_part(
        args.vehicle_id,
        item_number=args.item_number,
        third_item_number=args.third_item_number,
        item_description=args.description,
        description_line2=args.description_line2,
        quantity=args.quantity,
        supplier_name=args.supplier,
        installed_date=args.installed,
        category=args.category,
    )
    _print_parts([part], as_json=args.json)
    return EXIT_OK


def _cmd_delete_vehicle(register: FleetRegister, args: argparse.Namespace) -> int:
    if register.get_vehicle(args.vehicle_id) is None:
        print(f"Unknown vehicle: {args.vehicle_id}", file=sys.stderr)
        return EXIT_NOT_FOUND
    register.delete_vehicle(args.vehicle_id)
    print(f"Deleted vehicle {args.vehicle_id} and its parts.")
    return EXIT_OK


def _cmd_delete_part(register: FleetRegister, args: argparse.Namespace) -> int:
    if register.get_part(args.part_id) is None:
        print(f"Unknown part: {args.part_id}", file=sys.stderr)
        return EXIT_NOT_FOUND
    register.delete_part(args.part_id)
    print(f"Deleted part {args.part_id}.")
    return EXIT_OK


def _cmd_reset(register: FleetRegister, args: argparse.Namespace) -> int:
    state = register.reset()
    print(f"Register reset to seed data ({len(state.vehicles)} vehicles, {len(state.parts)} parts).")
    return EXIT_OK


async def _run_advice(config: FleetConfig, args: argparse.Namespace) -> int:
    async with AdvisoryClient(config) as advisory:
        if args.suggest:
            suggestions = await advisory.suggest_common_parts(args.subject)
            if args.json:
                _emit_json([s.model_dump() for s in suggestions])
            else:
                for s in suggestions:
                    print(f"- {s.name} [{s.category}] {s.interval}")
            return EXIT_OK
        tip = await advisory.get_part_maintenance_advice(args.subject, args.vehicle_model or "fleet vehicle")
    if args.json:
        _emit_json({"advice": tip})
    else:
        print(tip)
    return EXIT_OK


# ── parser ───────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fleetmaster", description="Browse and edit the fleet asset register.")
    parser.add_argument("--storage", help="Storage file path")
    parser.add_argument("--role", choices=[r.value for r in Role], help="Operator role (default: technician)")
    parser.add_argument("--json", action="store_true", help="Machine-readable output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("vehicles", help="List all vehicles")

    p_parts = sub.add_parser("parts", help="List parts, optionally for one vehicle")
    p_parts.add_argument("vehicle_id", nargs="?")

    p_search = sub.add_parser("search", help="Quick search by vehicle number, brand, or model")
    p_search.add_argument("query")
    p_search.add_argument("--parts", action="store_true", help="Search part numbers and descriptions instead")

    sub.add_parser("stats", help="Dashboard totals and recent updates")

    p_vehicle = sub.add_parser("add-vehicle", help="Add a vehicle, or edit one with --id")
    p_vehicle.add_argument("vehicle_number", nargs="?")
    p_vehicle.add_argument("--id", help="Edit this existing vehicle instead of adding one")
    p_vehicle.add_argument("--type", choices=[t.value for t in VehicleType])
    p_vehicle.add_argument("--brand")
    p_vehicle.add_argument("--model")
    p_vehicle.add_argument("--year")
    p_vehicle.add_argument("--chassis")

    p_part = sub.add_parser("add-part", help="Add a part to a vehicle")
    p_part.add_argument("vehicle_id")
    p_part.add_argument("--item-number", default="")
    p_part.add_argument("--third-item-number", default="")
    p_part.add_argument("--description", default="")
    p_part.add_argument("--description-line2", default="")
    p_part.add_argument("--quantity", default="1")
    p_part.add_argument("--supplier", default="")
    p_part.add_argument("--installed", help="Installation date (YYYY-MM-DD, default: today)")
    p_part.add_argument("--category", choices=[c.value for c in PartCategory], default=PartCategory.OTHER.value)

    p_del_vehicle = sub.add_parser("delete-vehicle", help="Delete a vehicle and all of its parts")
    p_del_vehicle.add_argument("vehicle_id")

    p_del_part = sub.add_parser("delete-part", help="Delete one part")
    p_del_part.add_argument("part_id")

    sub.add_parser("reset", help="Discard stored data and restore the seed dataset")

    p_advice = sub.add_parser("advice", help="Maintenance advice for a part (best effort)")
    p_advice.add_argument("subject", help="Part name, or vehicle type with --suggest")
    p_advice.add_argument("vehicle_model", nargs="?")
    p_advice.add_argument("--suggest", action="store_true", help="List common replacement parts for a vehicle type")

    return parser


_COMMANDS = {
    "vehicles": _cmd_vehicles,
    "parts": _cmd_parts,
    "search": _cmd_search,
    "stats": _cmd_stats,
    "add-vehicle": _cmd_add_vehicle,
    "add-part": _cmd_add_part,
    "delete-vehicle": _cmd_delete_vehicle,
    "delete-part": _cmd_delete_part,
    "reset": _cmd_reset,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = FleetConfig.from_env(storage_path=args.storage, role=args.role)
    except FleetError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.command == "advice":
        return asyncio.run(_run_advice(config, args))

    if args.command == "add-vehicle" and not args.id and (not args.vehicle_number or args.year is None or args.type is None):
        parser.error("add-vehicle needs a vehicle number, --type and --year (or --id to edit)")

    register = FleetRegister.from_config(config)
    try:
        return _COMMANDS[args.command](register, args)
    except FleetPermissionError as exc:
        print(f"Permission denied: {exc} (use --role admin)", file=sys.stderr)
        return EXIT_DENIED
    except FleetIntegrityError as exc:
        print(f"Integrity error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except ValidationError as exc:
        print(f"Invalid record: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except FleetError as exc:
        _logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
