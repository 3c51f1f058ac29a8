from __future__ import annotations

from receipt_points.api.main import _cors_origins
from receipt_points.core.config import Settings


def test_settings_defaults():
    s = Settings()
    assert isinstance(s.PORT, int)
    assert s.PROJECT_NAME


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("ENVIRONMENT", "production")
    s = Settings()
    assert s.PORT == 9001
    assert s.is_development is False


def test_cors_allows_all_in_development(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "development")
    assert _cors_origins(Settings()) == ["*"]


def test_cors_dedupes_configured_origins(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", '["https://a.example", "https://b.example", "https://a.example"]')
    assert _cors_origins(Settings()) == ["https://a.example", "https://b.example"]
