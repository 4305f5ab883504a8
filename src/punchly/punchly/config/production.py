import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/punchly.log")

REPORT_PROTECTION_PASSWORD = os.getenv("REPORT_PROTECTION_PASSWORD", "")

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
