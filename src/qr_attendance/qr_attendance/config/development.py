import os

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000/api")
IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", "https://api.ipify.org?format=json")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))

SESSION_FILE = os.getenv("SESSION_FILE", "~/.qr_attendance/session.json")

# Sent as tg_id with every submission
OPERATOR_ID = os.getenv("OPERATOR_ID", "test_tg_id")

LOCATION_TIMEOUT_MS = int(os.getenv("LOCATION_TIMEOUT_MS", "10000"))
LOCATION_MAX_AGE_MS = int(os.getenv("LOCATION_MAX_AGE_MS", "300000"))
# Either a fixed device position or an IP geolocation lookup
DEVICE_LATITUDE = os.getenv("DEVICE_LATITUDE")
DEVICE_LONGITUDE = os.getenv("DEVICE_LONGITUDE")
GEOLOCATION_URL = os.getenv("GEOLOCATION_URL", "http://ip-api.com/json")
AUTO_REQUEST_LOCATION = bool(int(os.getenv("AUTO_REQUEST_LOCATION", "0")))

SCAN_FPS = int(os.getenv("SCAN_FPS", "10"))
SCAN_SUCCESS_DELAY = 1.5
SCAN_ERROR_DELAY = 3.0
CAMERA_ERROR_DELAY = 2.0

DEBUG = True
