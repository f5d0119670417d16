import os

_ENV_ALIASES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module() -> str:
    """Dotted path of the settings module for this process.

    RFID_SETTINGS_MODULE names a module outright; otherwise APP_ENV picks one
    of the bundled ones and anything unknown runs as development.
    """
    explicit = os.getenv("RFID_SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENV_ALIASES.get(env, "config.development")
