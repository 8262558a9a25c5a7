"""Typed environment variable parsing helpers."""

import os
from typing import Optional

_TRUTHY = ("true", "1", "yes", "on")
_FALSEY = ("false", "0", "no", "off", "")


def _lookup(name: str, required: bool) -> Optional[str]:
    value = os.getenv(name)
    if value is None and required:
        raise KeyError(f"Environment variable '{name}' is required but not set.")
    return value


def get_env_str(name: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """Get an environment variable as a string."""
    value = _lookup(name, required)
    return default if value is None else value


def get_env_bool(
    name: str, default: Optional[bool] = None, required: bool = False
) -> Optional[bool]:
    """Get an environment variable as a boolean.

    Truthy: true, 1, yes, on
    Falsey: false, 0, no, off, (empty string)
    Surrounding whitespace and case are ignored.
    """
    value = _lookup(name, required)
    if value is None:
        return default

    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSEY:
        return False
    raise ValueError(f"Environment variable '{name}' must be a boolean, got '{value}'.")
