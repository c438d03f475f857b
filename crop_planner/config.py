"""
Settings for the crop-planner CLI.

Layers, lowest precedence first:
  1. built-in model defaults
  2. ``config/default.toml`` (or the file passed as ``config_path``)
  3. ``local.toml`` next to that file, if present
  4. ``CROP_PLANNER_*`` environment variables, after ``.env`` is loaded

``load_config()`` is for the CLI.  Library callers pass a
``RecommendationConfig`` (or nothing) straight to the engine functions and
never touch files.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# ── Sections ──────────────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Where crops come from.  ``path=None`` selects the packaged catalog."""

    model_config = ConfigDict(frozen=True)

    path: Optional[str] = None


class RecommendationConfig(BaseModel):
    """Look-back windows used by the recommendation engine."""

    model_config = ConfigDict(frozen=True)

    recent_plantings_window: int = Field(default=5, ge=1)   # plantings counted as "recent"
    replant_warning_months: int = Field(default=12, ge=1)   # warn when replanting sooner
    recent_history_months: int = Field(default=12, ge=1)    # resolved issues still warned about
    avoid_history_months: int = Field(default=24, ge=1)     # resolved issues that flag avoidance
    top_n: int = Field(default=10, ge=1)                    # rows printed by `recommend`


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        name = v.strip().upper()
        if name not in logging.getLevelNamesMapping() or name in ("NOTSET", "WARN", "FATAL"):
            raise ValueError(f"Unknown log level '{v}'.")
        return name


class AppConfig(BaseModel):
    """Every section the CLI reads, validated together."""

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loading ───────────────────────────────────────────────────────────────────

# env var -> (section, key); section None means top level
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str]] = {
    "CROP_PLANNER_CATALOG_PATH": ("catalog", "path"),
    "CROP_PLANNER_LOG_LEVEL":    ("logging", "level"),
    "CROP_PLANNER_DEBUG":        (None, "debug"),
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def project_root() -> Path:
    """Nearest ancestor of this package holding ``pyproject.toml``.

    Falls back to the package's parent directory for installed copies.
    """
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build an ``AppConfig`` from TOML layers and the environment.

    A missing *default* TOML file just means built-in defaults; an explicit
    ``config_path`` that does not exist is an error.

    Raises:
        FileNotFoundError: ``config_path`` was given but does not exist.
        pydantic.ValidationError: A merged value is invalid.
    """
    root = project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        base = root / "config" / "default.toml"
    else:
        base = Path(config_path)
        if not base.is_file():
            raise FileNotFoundError(f"Config file not found: {base}")

    raw: dict[str, Any] = {}
    for layer in (base, base.parent / "local.toml"):
        if layer.is_file():
            raw = merge_layers(raw, _read_toml(layer))

    raw = merge_layers(raw, _env_layer(os.environ))
    return AppConfig.model_validate(raw)


def merge_layers(lower: dict[str, Any], upper: dict[str, Any]) -> dict[str, Any]:
    """Return ``lower`` updated by ``upper``; nested tables merge key by key."""
    merged = dict(lower)
    for key, value in upper.items():
        below = merged.get(key)
        merged[key] = (
            merge_layers(below, value)
            if isinstance(below, dict) and isinstance(value, dict)
            else value
        )
    return merged


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _env_layer(environ: Mapping[str, str]) -> dict[str, Any]:
    """Translate set ``CROP_PLANNER_*`` variables into a config layer."""
    layer: dict[str, Any] = {}
    for var, (section, key) in _ENV_OVERRIDES.items():
        value: Any = environ.get(var)
        if not value:
            continue
        if key == "debug":
            value = value.strip().lower() in _TRUTHY
        target = layer if section is None else layer.setdefault(section, {})
        target[key] = value
    return layer
