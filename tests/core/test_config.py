import pytest

from app.core.config import DEV_FALLBACK_SECRET_KEY, Settings


def test_missing_secret_fails_outside_development():
    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings(_env_file=None, ENVIRONMENT="production", SECRET_KEY=None)


def test_missing_secret_falls_back_in_development():
    settings = Settings(_env_file=None, ENVIRONMENT="development", SECRET_KEY=None)
    assert settings.SECRET_KEY == DEV_FALLBACK_SECRET_KEY
    assert settings.USING_INSECURE_SECRET is True


def test_explicit_secret_is_used_in_production():
    settings = Settings(_env_file=None, ENVIRONMENT="production", SECRET_KEY="s3cr3t")
    assert settings.SECRET_KEY == "s3cr3t"
    assert settings.USING_INSECURE_SECRET is False
    assert settings.is_production


def test_database_url_composed_from_parts():
    settings = Settings(
        _env_file=None,
        DATABASE_HOST="db.internal",
        DATABASE_PORT="5433",
        DATABASE_USER="hub",
        DATABASE_PASSWORD="pw",
        DATABASE_NAME="coursehub",
    )
    assert settings.DATABASE_URL == "postgresql://hub:pw@db.internal:5433/coursehub"
