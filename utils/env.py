"""Environment helper utilities.

Loads a `.env` file from the project root so that engine settings
(``MARKDOWN_LOG_LEVEL``, ``MARKDOWN_RESTOCK_TARGET_DAYS``, ...) defined there
become available via ``os.getenv``, and parses typed values from them.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

__all__ = ["env_flag", "env_int", "load_project_dotenv"]

_TRUTHY = ("1", "true", "yes", "on")


def _find_project_root(start: Path | None = None) -> Path:
    """Walk upwards to the first directory holding `pyproject.toml`."""
    current = start or Path(__file__).resolve().parent
    for _ in range(10):  # safety break
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv() -> Path | None:
    """Load the project-level `.env` without overriding set variables; return its path if loaded."""
    dotenv_path = _find_project_root() / ".env"
    if not dotenv_path.exists():
        return None
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return dotenv_path


def _raw(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on" are truthy)."""
    value = _raw(name)
    if value is None:
        return default
    return value.lower() in _TRUTHY


def env_int(name: str, default: int | None = None) -> int | None:
    """Read an integer environment variable; a non-integer value raises ValueError."""
    value = _raw(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e
