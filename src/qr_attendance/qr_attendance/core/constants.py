"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TOKEN_STORAGE_KEY = "employee_token"
IDENTITY_STORAGE_KEY = "employee_data"

# Values a web storage layer may leave behind after writing an unset token.
PLACEHOLDER_TOKENS = frozenset({"undefined", "null"})

FALLBACK_CLIENT_IP = "127.0.0.1"

DEFAULT_LOCATION_TIMEOUT_MS = 10_000
DEFAULT_LOCATION_MAX_AGE_MS = 300_000
DEFAULT_SCAN_FPS = 10

DEFAULT_SCAN_SUCCESS_DELAY = 1.5
DEFAULT_SCAN_ERROR_DELAY = 3.0
DEFAULT_CAMERA_ERROR_DELAY = 2.0

TOKEN_LOG_PREFIX = 20

GENERIC_NETWORK_ERROR = "Network error. Please try again."
