import os


def get_settings_module() -> str:
    # APP_ENV selects the profile; anything unknown falls back to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "childcare_system.settings.production"

    if env in {"test", "testing"}:
        return "childcare_system.settings.testing"

    return "childcare_system.settings.development"
