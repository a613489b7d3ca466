"""State/store layer.

Everything that reads, transforms, or persists the register's
``AppState`` lives here. Mutations are pure functions in
:mod:`fleetmaster.state.reducer`; only :class:`FleetStore` touches the
persistent key-value slot.
"""

from fleetmaster.state.seed import seed_state
from fleetmaster.state.store import FleetStore, JsonFileBackend, KeyValueBackend, MemoryBackend

__all__ = [
    "FleetStore",
    "JsonFileBackend",
    "KeyValueBackend",
    "MemoryBackend",
    "seed_state",
]
