from authapi.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "DATABASE_URL", "CORS_ORIGINS", "BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.PORT == 8080
    assert settings.DATABASE_URL.startswith("sqlite:///")
    assert settings.BCRYPT_ROUNDS == 12
    assert settings.get_cors_origins() == ["*"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DATABASE_URL", "postgresql://auth:auth@db:5432/auth")
    settings = Settings(_env_file=None)
    assert settings.PORT == 9000
    assert settings.DATABASE_URL == "postgresql://auth:auth@db:5432/auth"


def test_cors_origins_from_comma_separated_string():
    settings = Settings(CORS_ORIGINS="http://localhost:3000, http://localhost:5173,", _env_file=None)
    assert settings.get_cors_origins() == ["http://localhost:3000", "http://localhost:5173"]


def test_cors_origins_from_list():
    settings = Settings(CORS_ORIGINS=["http://localhost:3000"], _env_file=None)
    assert settings.get_cors_origins() == ["http://localhost:3000"]
