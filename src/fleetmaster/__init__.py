"""fleetmaster - Fleet asset register for vehicles and their maintenance parts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fleetmaster")
except PackageNotFoundError:
    __version__ = "0+local"
from fleetmaster.advisory import AdvisoryClient
from fleetmaster.config import FleetConfig
from fleetmaster.exceptions import (
    FleetAdvisoryError,
    FleetConfigError,
    FleetError,
    FleetIntegrityError,
    FleetPermissionError,
    FleetStorageError,
)
from fleetmaster.models import (
    AppState,
    DashboardStats,
    Part,
    PartCategory,
    PartSuggestion,
    Role,
    Vehicle,
    VehicleType,
    new_record_id,
)
from fleetmaster.register import FleetRegister
from fleetmaster.state import FleetStore, JsonFileBackend, KeyValueBackend, MemoryBackend, seed_state
from fleetmaster.state.reducer import delete_part, delete_vehicle, upsert_part, upsert_vehicle

__all__ = [
    "__version__",
    "AdvisoryClient",
    "AppState",
    "DashboardStats",
    "FleetAdvisoryError",
    "FleetConfig",
    "FleetConfigError",
    "FleetError",
    "FleetIntegrityError",
    "FleetPermissionError",
    "FleetRegister",
    "FleetStorageError",
    "FleetStore",
    "JsonFileBackend",
    "KeyValueBackend",
    "MemoryBackend",
    "Part",
    "PartCategory",
    "PartSuggestion",
    "Role",
    "Vehicle",
    "VehicleType",
    "delete_part",
    "delete_vehicle",
    "new_record_id",
    "seed_state",
    "upsert_part",
    "upsert_vehicle",
]
