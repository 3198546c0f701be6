"""Settings and value-type catalog loader."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

# Environment variables that override keys of settings.yaml
ENV_OVERRIDES = {
    "auth_url": "BRALE_AUTH_URL",
    "api_url": "BRALE_API_URL",
    "timeout": "BRALE_TIMEOUT",
    "max_workers": "BRALE_MAX_WORKERS",
    "token_file": "BRALE_TOKEN_FILE",
}


class SettingsError(ValueError):
    """Raised when settings.yaml or an environment override is invalid."""


class Settings(BaseModel):
    """
    Client settings.

    Attributes
    ----------
    auth_url : str
        Base URL of the OAuth2 host
    api_url : str
        Base URL of the resource API host
    timeout : float
        HTTP timeout in seconds for every request
    max_workers : int
        Thread pool size for the balance fan-out
    token_file : Path
        Location of the persisted bearer token

    """

    auth_url: str
    api_url: str
    timeout: float = 30.0
    max_workers: int = 8
    token_file: Path


def _load_yaml(name: str) -> dict[str, Any]:
    path = Path(__file__).parent / name
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """
    Load settings from settings.yaml with environment overrides applied.

    Parameters
    ----------
    environ : dict[str, str] | None
        Environment mapping (defaults to ``os.environ``)

    Returns
    -------
    Settings
        Validated settings

    Raises
    ------
    SettingsError
        If a value does not validate

    """
    environ = os.environ if environ is None else environ
    raw = _load_yaml("settings.yaml")

    for key, env_name in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            raw[key] = value

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as e:
        fields = sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]})
        names = ", ".join(f"{field} ({ENV_OVERRIDES.get(field, 'settings.yaml')})" for field in fields)
        raise SettingsError(f"Invalid settings: {names}") from e

    settings.token_file = settings.token_file.expanduser()
    return settings


def get_value_types() -> list[str]:
    """
    Get the catalog of value-type symbols queried for balances.

    Returns
    -------
    list[str]
        Value-type symbols in catalog order

    """
    catalog = _load_yaml("value_types.yaml")
    return [str(symbol) for symbol in catalog.get("value_types", [])]
