"""Settings — environment-driven configuration defaults and overrides."""

from marvel_gateway.config import DEFAULT_UPSTREAM_BASE_URL, Settings


def test_defaults(monkeypatch):
    for var in ("API_KEY", "UPSTREAM_BASE_URL", "PORT", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 3000
    assert settings.api_key == ""
    assert settings.upstream_base_url == DEFAULT_UPSTREAM_BASE_URL
    assert settings.cors_origins == ["*"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("API_KEY", "abc123")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.api_key == "abc123"
    assert settings.port == 8080


def test_upstream_base_url_trailing_slash_stripped():
    settings = Settings(_env_file=None, upstream_base_url="https://example.test/")
    assert settings.upstream_base_url == "https://example.test"
