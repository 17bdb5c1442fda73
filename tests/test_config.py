"""Settings loading and the signing-secret requirement."""

import pytest
from pydantic import ValidationError

from storerate.core.config import _TEST_SECRET_KEY, Settings


@pytest.mark.parametrize("environment", ["production", "development"])
def test_missing_secret_fails_outside_test_mode(environment):
    with pytest.raises(ValidationError, match="SECRET_KEY"):
        Settings(_env_file=None, ENVIRONMENT=environment, SECRET_KEY="")


def test_test_mode_substitutes_secret():
    cfg = Settings(_env_file=None, ENVIRONMENT="test", SECRET_KEY="")
    assert cfg.SECRET_KEY == _TEST_SECRET_KEY


def test_explicit_secret_is_kept():
    secret = "x" * 48
    cfg = Settings(_env_file=None, ENVIRONMENT="Production", SECRET_KEY=secret)
    assert cfg.ENVIRONMENT == "production"
    assert cfg.SECRET_KEY == secret


def test_unknown_environment_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENVIRONMENT="staging", SECRET_KEY="x" * 48)


def test_cors_origins_accept_comma_list():
    cfg = Settings(
        _env_file=None,
        ENVIRONMENT="test",
        CORS_ORIGINS="http://a.example, http://b.example",
    )
    assert cfg.CORS_ORIGINS == ["http://a.example", "http://b.example"]
