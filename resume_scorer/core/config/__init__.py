from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    min_resume_chars: int
    max_upload_bytes: int
    semantic_classifier_enabled: bool
    semantic_timeout_seconds: float
    spacy_model: str
    scoring_config_path: str | None


settings = Settings(
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    min_resume_chars=_get_env_int("MIN_RESUME_CHARS", 50),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 50 * 1024 * 1024),
    semantic_classifier_enabled=_get_env_bool("SEMANTIC_CLASSIFIER_ENABLED", False),
    semantic_timeout_seconds=_get_env_float("SEMANTIC_TIMEOUT_SECONDS", 3.0),
    spacy_model=_get_env("SPACY_MODEL", "zh_core_web_sm") or "zh_core_web_sm",
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
)

if settings.min_resume_chars < 0:
    raise RuntimeError("MIN_RESUME_CHARS must not be negative.")

__all__ = ["Settings", "settings"]
