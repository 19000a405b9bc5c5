# score_api/config.py
from __future__ import annotations

import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Scoring core
# -------------------------
# Undo stack depth (oldest snapshot evicted beyond this)
HISTORY_LIMIT: int = _get_env_int("HISTORY_LIMIT", 50)

DEFAULT_TOTAL_OVERS: int = _get_env_int("DEFAULT_TOTAL_OVERS", 20)
DEFAULT_MAX_WICKETS: int = _get_env_int("DEFAULT_MAX_WICKETS", 10)


# -------------------------
# Gemini commentary (OPTIONAL)
# -------------------------
GEMINI_API_KEY: str = _get_env("GEMINI_API_KEY")
GEMINI_MODEL_NAME: str = _get_env("GEMINI_MODEL_NAME", "gemini-2.5-flash")

# If 0, commentary endpoint always serves the static fallback
COMMENTARY_ENABLED: bool = _get_env("COMMENTARY_ENABLED", "1") == "1"


# -------------------------
# Logging
# -------------------------
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    if HISTORY_LIMIT <= 0:
        raise RuntimeError("HISTORY_LIMIT must be positive")

    if DEFAULT_TOTAL_OVERS <= 0:
        raise RuntimeError("DEFAULT_TOTAL_OVERS must be positive")

    if DEFAULT_MAX_WICKETS <= 0:
        raise RuntimeError("DEFAULT_MAX_WICKETS must be positive")

    if not GEMINI_MODEL_NAME:
        raise RuntimeError("GEMINI_MODEL_NAME must not be empty")

    if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise RuntimeError(f"LOG_LEVEL must be a standard logging level, got {LOG_LEVEL!r}")
