"""Central configuration for Radiance.

Engine parameters (input wait, minimum terminal size, definition directory,
logging, schema strictness) live here. Every value has a sensible default and
can be overridden through ``RAD_*`` environment variables; malformed values
fall back to the default.
"""
from __future__ import annotations
import os
from pathlib import Path


def _get_int_env(name: str, default: int, minval: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


# ---------------- Input loop ----------------
# Bounded input wait (ms); on timeout the occupancy cursor blinks
INPUT_TIMEOUT_MS: int = _get_int_env("RAD_INPUT_TIMEOUT_MS", 500, minval=50)


# ---------------- Terminal ----------------
# Used when the game definition has no min_screen_size
MIN_SCREEN_COLS: int = _get_int_env("RAD_MIN_COLS", 80, minval=1)
MIN_SCREEN_ROWS: int = _get_int_env("RAD_MIN_ROWS", 20, minval=1)


# ---------------- Content ----------------
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "game" / "assets" / "world"


def get_config_path() -> Path:
    """Definition directory. Var: RAD_CONFIG_PATH (default: bundled demo world)."""
    raw = os.getenv("RAD_CONFIG_PATH")
    if raw is None or not raw.strip():
        return DEFAULT_CONFIG_PATH
    return Path(raw.strip()).expanduser()


def get_strict_schema() -> bool:
    """Validate raw definition documents with jsonschema. Var: RAD_STRICT_SCHEMA (default True)."""
    return _get_bool_env("RAD_STRICT_SCHEMA", True)


# ---------------- Logging ----------------

def get_log_level() -> str:
    """Var: RAD_LOG_LEVEL (default WARNING)."""
    return os.getenv("RAD_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"


def get_log_file() -> str:
    """Logs go to a file, the terminal belongs to the renderer. Var: RAD_LOG_FILE."""
    return os.getenv("RAD_LOG_FILE", "radiance.log").strip() or "radiance.log"


__all__ = [
    "INPUT_TIMEOUT_MS",
    "MIN_SCREEN_COLS", "MIN_SCREEN_ROWS",
    "DEFAULT_CONFIG_PATH", "get_config_path", "get_strict_schema",
    "get_log_level", "get_log_file",
]
