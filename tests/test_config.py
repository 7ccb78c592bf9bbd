import logging

import pytest

from calendar_gateway.config import Config, OAuthClientConfig, load_oauth_config
from calendar_gateway.utils.error_handler import ConfigurationError
from server import create_app

ALL_VARS = [
    "GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_REDIRECT_URI",
    "MICROSOFT_CLIENT_ID", "MICROSOFT_CLIENT_SECRET", "MICROSOFT_REDIRECT_URI",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ALL_VARS + ["MICROSOFT_TENANT_ID"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_google_config(clean_env):
    clean_env.setenv("GOOGLE_CLIENT_ID", "id")
    clean_env.setenv("GOOGLE_CLIENT_SECRET", "secret")
    clean_env.setenv("GOOGLE_REDIRECT_URI", "http://localhost:8080/google/callback")
    assert load_oauth_config("google") == OAuthClientConfig(
        client_id="id",
        client_secret="secret",
        redirect_uri="http://localhost:8080/google/callback",
    )


def test_load_microsoft_config_tenant(clean_env):
    clean_env.setenv("MICROSOFT_CLIENT_ID", "id")
    clean_env.setenv("MICROSOFT_CLIENT_SECRET", "secret")
    clean_env.setenv("MICROSOFT_REDIRECT_URI", "http://localhost:8080/microsoft/callback")
    clean_env.setenv("MICROSOFT_TENANT_ID", "organizations")
    assert load_oauth_config("microsoft").tenant_id == "organizations"


def test_missing_vars_are_named(clean_env):
    clean_env.setenv("MICROSOFT_CLIENT_ID", "id")
    with pytest.raises(ConfigurationError) as exc_info:
        load_oauth_config("microsoft")
    assert "MICROSOFT_CLIENT_SECRET" in exc_info.value.message
    assert "MICROSOFT_REDIRECT_URI" in exc_info.value.message
    assert "MICROSOFT_CLIENT_ID" not in exc_info.value.message


def test_blank_values_count_as_missing(clean_env):
    clean_env.setenv("GOOGLE_CLIENT_ID", "   ")
    clean_env.setenv("GOOGLE_CLIENT_SECRET", "secret")
    clean_env.setenv("GOOGLE_REDIRECT_URI", "http://localhost/cb")
    with pytest.raises(ConfigurationError):
        load_oauth_config("google")


def test_app_refuses_to_start_without_config(clean_env):
    with pytest.raises(ConfigurationError):
        create_app()


def test_unknown_provider_config():
    with pytest.raises(ConfigurationError):
        load_oauth_config("yahoo")


def test_log_level_mapping(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "debug")
    assert Config.get_log_level() == logging.DEBUG
    monkeypatch.setattr(Config, "LOG_LEVEL", "nonsense")
    assert Config.get_log_level() == logging.INFO


def test_fixed_timezones():
    assert Config.GOOGLE_TIMEZONE == "Asia/Ho_Chi_Minh"
    assert Config.MICROSOFT_TIMEZONE == "Asia/Bangkok"
