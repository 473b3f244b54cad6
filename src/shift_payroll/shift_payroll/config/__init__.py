import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown falls back to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "shift_payroll.config.production"

    if env in {"test", "testing"}:
        return "shift_payroll.config.testing"

    return "shift_payroll.config.development"
