import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "punchly.config.production"

    if env in {"test", "testing"}:
        return "punchly.config.testing"

    return "punchly.config.development"
