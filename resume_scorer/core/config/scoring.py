from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from resume_scorer.core.config import settings

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "data" / "scoring.yaml"


def scoring_config_path() -> Path:
    if settings.scoring_config_path:
        return Path(settings.scoring_config_path)
    return _DEFAULT_SCORING_CONFIG_PATH


def load_scoring_config(path: Path) -> dict[str, Any]:
    """Read and validate one scoring rule file without touching the cache."""
    if not path.exists():
        raise RuntimeError(
            f"Scoring config not found at '{path}'. "
            "Expected file: resume_scorer/data/scoring.yaml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid scoring config '{path}': expected a top-level mapping."
        )
    for section in ("version", "extraction", "scoring", "specialization", "jobs"):
        if section not in parsed:
            raise RuntimeError(f"Invalid scoring config '{path}': missing '{section}'.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Load the scoring rule table once per process and cache it."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    _SCORING_CONFIG_CACHE = load_scoring_config(scoring_config_path())
    return _SCORING_CONFIG_CACHE


def lookup(config: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Resolve a dot path such as 'scoring.skills.buckets' inside a mapping."""
    if not path:
        return default

    current: Any = config
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'specialization.divisor'."""
    return lookup(get_scoring_config(), path, default)
