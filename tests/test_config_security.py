from __future__ import annotations

import pytest
from pydantic import ValidationError

from courtbook.core.config import Settings


def test_default_secret_key_allowed_in_development() -> None:
    settings = Settings(_env_file=None, app_env="development", secret_key="change-me")
    assert settings.secret_key == "change-me"


def test_default_secret_key_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="production", secret_key="change-me")


def test_placeholder_secret_key_prefix_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="prod", secret_key="change-me-in-production")


def test_custom_secret_key_allowed_in_production() -> None:
    settings = Settings(_env_file=None, app_env="production", secret_key="super-secure-value")
    assert settings.secret_key == "super-secure-value"


def test_booking_policy_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.booking_cancellation_lead_hours == 24
    assert settings.booking_min_duration_minutes == 30
    assert settings.booking_max_duration_minutes == 480
    assert settings.booking_auto_confirm is True
    assert settings.booking_timezone == "UTC"


def test_inconsistent_duration_bounds_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            booking_min_duration_minutes=120,
            booking_max_duration_minutes=60,
        )


def test_template_hours_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, template_default_open_hour=22, template_default_close_hour=6)


def test_blank_timezone_falls_back_to_utc() -> None:
    settings = Settings(_env_file=None, booking_timezone="  ")
    assert settings.booking_timezone == "UTC"


@pytest.mark.parametrize("name", ["Mars/Olympus", "Europe/Berlinn", "../etc/passwd"])
def test_unknown_timezone_rejected(name: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, booking_timezone=name)


def test_known_timezone_is_accepted() -> None:
    settings = Settings(_env_file=None, booking_timezone=" Europe/Berlin ")
    assert settings.booking_timezone == "Europe/Berlin"
