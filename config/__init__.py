import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown means development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def env_list(name: str, default: str = "") -> list:
    """Comma separated environment value as a list of non-empty strings."""
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


def env_optional_int(name: str):
    value = os.getenv(name, "").strip()
    return int(value) if value else None
