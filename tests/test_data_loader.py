"""Tests for settings and value-type catalog loading."""

from pathlib import Path

import pytest

from brale_dashboard.data import ENV_OVERRIDES, SettingsError, get_value_types, load_settings


def test_value_type_catalog():
    """Test the bundled value-type catalog."""
    value_types = get_value_types()

    assert isinstance(value_types, list)
    assert value_types[0] == "SBC"
    assert "USDS" in value_types
    assert "USD+" in value_types
    assert "4MGCC" in value_types
    assert len(value_types) == 39
    assert len(set(value_types)) == len(value_types)
    assert all(isinstance(symbol, str) for symbol in value_types)


def test_default_settings():
    """Test defaults from settings.yaml."""
    settings = load_settings(environ={})

    assert settings.auth_url == "https://auth.brale.xyz"
    assert settings.api_url == "https://api.brale.xyz"
    assert settings.timeout == 30.0
    assert settings.max_workers == 8
    assert settings.token_file == Path("~/.config/brale-dashboard/token.json").expanduser()


def test_environment_overrides(tmp_path):
    """Test that BRALE_* variables override the defaults."""
    settings = load_settings(
        environ={
            "BRALE_AUTH_URL": "https://auth.example",
            "BRALE_API_URL": "https://api.example",
            "BRALE_TIMEOUT": "5.5",
            "BRALE_MAX_WORKERS": "2",
            "BRALE_TOKEN_FILE": str(tmp_path / "token.json"),
        }
    )

    assert settings.auth_url == "https://auth.example"
    assert settings.api_url == "https://api.example"
    assert settings.timeout == 5.5
    assert settings.max_workers == 2
    assert settings.token_file == tmp_path / "token.json"


def test_empty_override_is_ignored():
    """Test that empty variables keep the default."""
    settings = load_settings(environ={"BRALE_API_URL": ""})

    assert settings.api_url == "https://api.brale.xyz"


def test_every_setting_has_an_override():
    """Test that each settings key can be overridden."""
    assert set(ENV_OVERRIDES) == {"auth_url", "api_url", "timeout", "max_workers", "token_file"}


@pytest.mark.parametrize(
    "environ,variable",
    [
        ({"BRALE_TIMEOUT": "abc"}, "BRALE_TIMEOUT"),
        ({"BRALE_MAX_WORKERS": "many"}, "BRALE_MAX_WORKERS"),
    ],
)
def test_invalid_override(environ, variable):
    """Test that a malformed override raises SettingsError naming the variable."""
    with pytest.raises(SettingsError) as exc_info:
        load_settings(environ=environ)

    assert variable in str(exc_info.value)
