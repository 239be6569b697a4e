"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``     : committed static defaults
  2. ``config/local.toml``       : optional local overrides (gitignored)
  3. ``.env``                    : local env overrides (gitignored)
  4. Environment variables       : ``STOCK_ANALYSER_*`` prefix

When no ``--config`` is given and ``config/default.toml`` is absent (a
regular, non-editable install), layers 1-2 are replaced by the model
defaults below; layers 3-4 still apply.

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands receive an ``AppConfig`` instance: never raw dicts or
individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from stock_analyser.ranking.algorithms import SORT_ALGORITHMS

logger = logging.getLogger(__name__)

# ── Sub-config models ─────────────────────────────────────────────────────────


class DataConfig(BaseModel):
    """Location and date layout of the source CSV."""

    model_config = ConfigDict(frozen=True)

    csv_path: str = "data/all_stocks_5yr.csv"
    date_format: str = "%Y-%m-%d"


class RankingConfig(BaseModel):
    """Defaults for top-N ranking queries."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 5
    default_algorithm: str = "quick"

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_n must be >= 1, got {v}.")
        return v

    @field_validator("default_algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SORT_ALGORITHMS:
            raise ValueError(
                f"Unknown sort algorithm '{v}'. Must be one of {sorted(SORT_ALGORITHMS)}."
            )
        return v


class AnalyticsConfig(BaseModel):
    """Moving-average windows used by the trend classifier."""

    model_config = ConfigDict(frozen=True)

    short_window: int = 5
    long_window: int = 20

    @model_validator(mode="after")
    def validate_windows(self) -> "AnalyticsConfig":
        if self.short_window < 1:
            raise ValueError(f"short_window must be >= 1, got {self.short_window}.")
        if self.short_window >= self.long_window:
            raise ValueError(
                f"short_window ({self.short_window}) must be smaller than "
                f"long_window ({self.long_window})."
            )
        return self


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration: the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    ranking: RankingConfig = RankingConfig()
    analytics: AnalyticsConfig = AnalyticsConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default is
            absent, the built-in model defaults are used instead.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config. A missing default file (e.g. a non-editable
    #    install, where config/ is not shipped) falls back to model defaults.
    raw: dict[str, Any] = {}
    if config_path is None:
        config_path = root / "config" / "default.toml"
        if not config_path.exists():
            logger.debug(
                "No default config at %s; using built-in defaults.", config_path
            )
            return _build_app_config(_apply_env_overrides(raw))

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply STOCK_ANALYSER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply STOCK_ANALYSER_* env vars to the raw config dict.

    Supported overrides:
      STOCK_ANALYSER_CSV_PATH   → raw["data"]["csv_path"]
      STOCK_ANALYSER_LOG_LEVEL  → raw["logging"]["level"]
      STOCK_ANALYSER_DEBUG      → raw["debug"]
    """
    if csv_path := os.environ.get("STOCK_ANALYSER_CSV_PATH"):
        raw.setdefault("data", {})["csv_path"] = csv_path

    if log_level := os.environ.get("STOCK_ANALYSER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("STOCK_ANALYSER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        data=DataConfig(**raw.get("data", {})),
        ranking=RankingConfig(**raw.get("ranking", {})),
        analytics=AnalyticsConfig(**raw.get("analytics", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
