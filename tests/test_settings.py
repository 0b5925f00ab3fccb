import pytest
from pydantic import ValidationError

from placement.config.settings import Settings


def test_defaults():
    config = Settings(_env_file=None)

    assert config.ONBOARDING_PROFILE == "standard"
    assert config.ONBOARDING_PERSISTENCE == "batch"
    assert config.REQUIRE_ONBOARDED_FOR_INTEREST is True
    assert config.IDENTITY_COOKIE_NAME == "client_uuid"


def test_values_are_normalized():
    config = Settings(
        _env_file=None,
        ONBOARDING_PROFILE=" Single ",
        ONBOARDING_PERSISTENCE="EAGER",
        LOG_LEVEL="debug",
        CORS_ORIGINS="https://a.example, https://b.example",
    )

    assert config.ONBOARDING_PROFILE == "single"
    assert config.ONBOARDING_PERSISTENCE == "eager"
    assert config.LOG_LEVEL == "DEBUG"
    assert config.CORS_ORIGINS == ["https://a.example", "https://b.example"]


def test_unknown_profile_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ONBOARDING_PROFILE="express")


def test_sqlite_detection():
    assert Settings(_env_file=None, DATABASE_URL="sqlite:///./x.db").is_sqlite()
    assert not Settings(_env_file=None, DATABASE_URL="postgresql://db/placement").is_sqlite()
