import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None

# Leave empty to protect report sheets without a password
REPORT_PROTECTION_PASSWORD = os.getenv("REPORT_PROTECTION_PASSWORD", "")

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
