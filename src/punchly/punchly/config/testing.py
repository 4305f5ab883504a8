SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = None

REPORT_PROTECTION_PASSWORD = ""

DEFAULT_TIMEZONE = "UTC"
