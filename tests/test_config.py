from __future__ import annotations

import pytest

from genai_proxy.common.config import Settings, parse_origins

ENV_VARS = [
    "GEMINI_API_KEY", "GEMINI_MODEL", "FRONTEND_URL", "CORS_STRICT",
    "MAX_UPLOAD_MB", "PROMPTS_PATH", "HOST", "PORT", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_parse_origins_trims_and_drops_blanks() -> None:
    assert parse_origins(" https://a.example, ,https://b.example ,") == ("https://a.example", "https://b.example")
    assert parse_origins("") == ()
    assert parse_origins(None) == ()


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env(load_env_file=False)
    assert s.gemini_api_key is None
    assert s.gemini_model == "gemini-2.5-flash"
    assert s.allowed_origins == ()
    assert s.cors_strict is True
    assert s.max_upload_bytes == 4 * 1024 * 1024
    assert s.port == 3000


def test_from_env_overrides(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("GEMINI_API_KEY", "secret")
    clean_env.setenv("GEMINI_MODEL", "gemini-2.0-flash")
    clean_env.setenv("FRONTEND_URL", "https://app.example,https://admin.example")
    clean_env.setenv("CORS_STRICT", "false")
    clean_env.setenv("MAX_UPLOAD_MB", "1")
    clean_env.setenv("PORT", "8080")
    s = Settings.from_env(load_env_file=False)
    assert s.gemini_api_key == "secret"
    assert s.gemini_model == "gemini-2.0-flash"
    assert s.allowed_origins == ("https://app.example", "https://admin.example")
    assert s.cors_strict is False
    assert s.max_upload_bytes == 1024 * 1024
    assert s.port == 8080


def test_origin_allowed() -> None:
    open_settings = Settings()
    assert open_settings.origin_allowed("https://anything.example")

    locked = Settings(allowed_origins=("https://app.example",))
    assert locked.origin_allowed(None)
    assert locked.origin_allowed("")
    assert locked.origin_allowed("https://app.example")
    assert not locked.origin_allowed("https://evil.example")
