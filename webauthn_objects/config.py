"""Environment driven settings for the command line converter."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ["Settings", "load_settings"]


_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_JSON_INDENT = 2


def _env_flag(environ: Mapping[str, str], name: str) -> Optional[bool]:
    """Return ``True`` or ``False`` when the named env var is explicitly set."""

    raw_value = environ.get(name)
    if raw_value is None:
        return None

    normalised = raw_value.strip().lower()
    if normalised in {"", "0", "false", "off", "no"}:
        return False
    return True


def _env_indent(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw_value = environ.get(name)
    if raw_value is None:
        return _DEFAULT_JSON_INDENT

    cleaned = raw_value.strip()
    if not cleaned:
        return None
    try:
        indent = int(cleaned)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}.") from exc
    return indent if indent >= 0 else None


def _env_log_level(environ: Mapping[str, str], name: str) -> int:
    raw_value = (environ.get(name) or _DEFAULT_LOG_LEVEL).strip().upper()
    if raw_value.isdigit():
        return int(raw_value)
    level = logging.getLevelName(raw_value)
    if not isinstance(level, int):
        raise ValueError(f"{name} names an unknown log level: {raw_value!r}.")
    return level


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.WARNING
    json_indent: Optional[int] = _DEFAULT_JSON_INDENT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (``os.environ`` by default).

    ``WEBAUTHN_OBJECTS_DEBUG`` takes precedence over
    ``WEBAUTHN_OBJECTS_LOG_LEVEL``. An empty or negative
    ``WEBAUTHN_OBJECTS_JSON_INDENT`` selects compact output.
    """

    if environ is None:
        environ = os.environ

    log_level = _env_log_level(environ, "WEBAUTHN_OBJECTS_LOG_LEVEL")
    if _env_flag(environ, "WEBAUTHN_OBJECTS_DEBUG"):
        log_level = logging.DEBUG

    return Settings(
        log_level=log_level,
        json_indent=_env_indent(environ, "WEBAUTHN_OBJECTS_JSON_INDENT"),
    )
