"""Tests for environment configuration."""

import os

import pytest

from api.credentials import InteractiveCredentials, NonInteractiveCredentials
from api.errors import ConfigurationError
from app.settings import load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("BETFAIR_"):
            monkeypatch.delenv(name)


@pytest.fixture
def env(monkeypatch):
    def set_env(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"BETFAIR_{key}", value)
    return set_env


class TestLoadSettings:

    def test_interactive_defaults(self, env):
        env(USERNAME="userName", PASSWORD="passWord", APP_KEY="appKey")

        settings = load_settings(dotenv=False)

        assert settings.region == "UK"
        assert settings.verify_ssl is True
        assert settings.timeout is None
        assert settings.delayed_data is False
        assert settings.log_level == "INFO"
        assert settings.uses_certificate is False
        assert settings.credentials() == InteractiveCredentials("userName", "passWord", "UK", application_key="appKey")

    def test_certificate_settings(self, env):
        env(
            USERNAME="userName", PASSWORD="passWord", REGION="au",
            CERT_FILE="client.crt", KEY_FILE="client.key",
            APP_NAME="MyApp", DELAYED_DATA="true", VERIFY_SSL="false", TIMEOUT="12.5",
        )

        settings = load_settings(dotenv=False)
        creds = settings.credentials()

        assert isinstance(creds, NonInteractiveCredentials)
        assert creds.region == "AU"
        assert (creds.cert_file, creds.key_file) == ("client.crt", "client.key")
        assert settings.app_name == "MyApp"
        assert settings.delayed_data is True
        assert settings.verify_ssl is False
        assert settings.timeout == 12.5

    def test_password_hidden_in_repr(self, env):
        env(USERNAME="userName", PASSWORD="s3cret", APP_KEY="appKey")

        assert "s3cret" not in repr(load_settings(dotenv=False))

    @pytest.mark.parametrize(
        "values",
        [
            {},
            {"USERNAME": "u"},
            {"USERNAME": "u", "PASSWORD": "p"},
            {"USERNAME": "u", "PASSWORD": "p", "CERT_FILE": "c"},
            {"USERNAME": "u", "PASSWORD": "p", "APP_KEY": "k", "REGION": "ZZ"},
            {"USERNAME": "u", "PASSWORD": "p", "APP_KEY": "k", "VERIFY_SSL": "maybe"},
            {"USERNAME": "u", "PASSWORD": "p", "APP_KEY": "k", "TIMEOUT": "soon"},
            {"USERNAME": "u", "PASSWORD": "p", "APP_KEY": "k", "TIMEOUT": "-1"},
        ],
    )
    def test_invalid(self, env, values):
        env(**values)

        with pytest.raises(ConfigurationError):
            load_settings(dotenv=False)
