"""Tests for password hashing, avatars, tokens and settings validation."""

import pytest
from pydantic import ValidationError

from backend.app.auth.jwt import create_user_token, decode_access_token
from devconnector.config import Settings
from devconnector.security import get_password_hash, gravatar_url, verify_password


class TestPasswords:
    def test_hash_verifies(self):
        hashed = get_password_hash("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_hashes_are_salted(self):
        assert get_password_hash("secret123") != get_password_hash("secret123")


class TestGravatar:
    def test_url_ignores_case_and_whitespace(self):
        assert gravatar_url(" Jane@Example.com ") == gravatar_url("jane@example.com")

    def test_url_shape(self):
        url = gravatar_url("jane@example.com")

        assert url.startswith("https://www.gravatar.com/avatar/")
        assert "s=200" in url
        assert "r=x" in url
        assert "d=retro" in url


class TestTokens:
    def test_user_token_round_trip(self):
        payload = decode_access_token(create_user_token(42))

        assert payload["sub"] == "42"
        assert payload["exp"]
        assert payload["jti"]

    def test_tampered_token(self):
        token = create_user_token(42)

        with pytest.raises(ValueError):
            decode_access_token(token[:-2] + ("A" if token[-2] != "A" else "B") + token[-1])


class TestSettings:
    def test_production_rejects_default_secret(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")

        with pytest.raises(ValidationError):
            Settings(JWT_SECRET_KEY="CHANGE_ME")

    def test_production_rejects_short_secret(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")

        with pytest.raises(ValidationError):
            Settings(JWT_SECRET_KEY="short")

    def test_development_warns_on_default_secret(self, monkeypatch):
        monkeypatch.setenv("ENV", "development")

        with pytest.warns(UserWarning):
            Settings(JWT_SECRET_KEY="CHANGE_ME")

    def test_production_config_report(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        settings = Settings(
            JWT_SECRET_KEY="x" * 40, CORS_ALLOWED_ORIGINS="http://localhost:3000"
        )

        errors, warnings = settings.validate_production_config()

        assert errors == []
        assert any("GITHUB_TOKEN" in warning for warning in warnings)
        assert any("localhost" in warning for warning in warnings)

    def test_cors_origins_list(self):
        settings = Settings(CORS_ALLOWED_ORIGINS="https://a.example, ,https://b.example")

        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]
