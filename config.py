"""Shared constants, settings access and runtime environment checks for Restlet Kit."""

import json
import os

_SETTINGS_FILE = os.environ.get(
    "RESTLET_KIT_SETTINGS", os.path.expanduser("~/.config/restlet-kit/settings.json")
)
_DEFAULT_SCHEMA_DIR = os.path.join(os.path.dirname(__file__), "schemas")


def _read_setting(*keys, default=None):
    """Read a nested setting from the settings file."""
    try:
        with open(_SETTINGS_FILE) as f:
            data = json.load(f)
        for k in keys:
            data = data[k]
        return data
    except (FileNotFoundError, json.JSONDecodeError, KeyError, TypeError):
        return default


def get_environment() -> str:
    """Deployment environment name: RESTLET_KIT_ENV, else the settings file, else production."""
    env = os.environ.get("RESTLET_KIT_ENV") or _read_setting("environment", default="production")
    return str(env).lower()


def get_timezone() -> str:
    """Company timezone name (e.g. ``America/Chicago``) from the settings file, default UTC."""
    return _read_setting("timezone", default="UTC")


def is_sandbox() -> bool:
    """Whether this deployment runs against the sandbox account."""
    return get_environment() == "sandbox"


def get_param(name: str, default=None):
    """Value of a deployment parameter from the settings file's ``params`` table."""
    return _read_setting("params", name, default=default)


def get_schema_dir() -> str:
    return _read_setting("schemas", "dir", default=_DEFAULT_SCHEMA_DIR)


SCHEMA_DIR = get_schema_dir()
PORT = 4250
