"""Settings modules for ram-points, selected by the ``APP_ENV`` variable."""

import os

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "ci": "config.testing",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    # Unknown values fall back to development.
    return _SETTINGS_BY_ENV.get(env, "config.development")
