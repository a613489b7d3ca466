"""Internal constants shared across the library."""

#: Key under which the whole application state is persisted.
STORAGE_KEY = "fleetmaster_data"

#: Default location of the file-backed key-value slot.
DEFAULT_STORAGE_PATH = "~/.fleetmaster/storage.json"

# ------------------------------------------------------------------
# Record identifiers
# ------------------------------------------------------------------

ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
ID_LENGTH = 9

# ------------------------------------------------------------------
# Advisory service (Google Generative Language REST API)
# ------------------------------------------------------------------

ADVISORY_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
ADVISORY_MODEL = "gemini-3-flash-preview"
ADVISORY_API_KEY_HEADER = "x-goog-api-key"
ADVISORY_FALLBACK_TEXT = "Maintenance advice unavailable at the moment."
ADVISORY_MAX_WORDS = 60
ADVISORY_SUGGESTION_COUNT = 5

# Number of vehicles listed under "recent updates" on the dashboard.
RECENT_VEHICLES_LIMIT = 3
