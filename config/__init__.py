import importlib
import os

from dotenv import load_dotenv


def get_settings_module() -> str:
    # Environment comes from APP_ENV, defaulting to 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def load_settings():
    """Load .env (without overriding the real environment), then the settings module."""
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())
