import pytest

from meetup.utils import runtime


def test_defaults(monkeypatch):
    for var in ("APP_ENV", "JWT_SECRET", "JWT_EXPIRES_IN", "CORS_ORIGINS"):
        monkeypatch.delenv(var, raising=False)
    assert runtime.app_env() == "development"
    assert runtime.is_production() is False
    assert runtime.jwt_secret() == runtime.DEV_JWT_SECRET
    assert runtime.jwt_expires_in() == 604800
    assert runtime.cors_origins() == ["http://localhost:3000"]


def test_production_requires_real_secret(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(RuntimeError):
        runtime.is_production()
    monkeypatch.setenv("JWT_SECRET", runtime.DEV_JWT_SECRET)
    with pytest.raises(RuntimeError):
        runtime.is_production()
    monkeypatch.setenv("JWT_SECRET", "a-long-random-production-secret")
    assert runtime.is_production() is True


@pytest.mark.parametrize("raw,expected", [("3600", 3600), ("abc", 604800), ("0", 604800), ("-5", 604800)])
def test_jwt_expires_in_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("JWT_EXPIRES_IN", raw)
    assert runtime.jwt_expires_in() == expected


def test_csrf_flag_and_cors_list(monkeypatch):
    monkeypatch.setenv("CSRF_PROTECTION", "TRUE")
    assert runtime.csrf_protection_enabled()
    monkeypatch.setenv("CSRF_PROTECTION", "false")
    assert not runtime.csrf_protection_enabled()
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example ,")
    assert runtime.cors_origins() == ["https://a.example", "https://b.example"]
