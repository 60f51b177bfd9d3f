import os

API_BASE_URL = "http://attendance.test/api"
IP_LOOKUP_URL = "http://ip.test/?format=json"
REQUEST_TIMEOUT_SECONDS = 1.0

SESSION_FILE = os.getenv("SESSION_FILE", "session.test.json")

OPERATOR_ID = "test_tg_id"

LOCATION_TIMEOUT_MS = 200
LOCATION_MAX_AGE_MS = 0
DEVICE_LATITUDE = "10.0"
DEVICE_LONGITUDE = "20.0"
GEOLOCATION_URL = ""
AUTO_REQUEST_LOCATION = False

SCAN_FPS = 50
SCAN_SUCCESS_DELAY = 0
SCAN_ERROR_DELAY = 0
CAMERA_ERROR_DELAY = 0

DEBUG = False
TESTING = True
