"""Configuration loader for framegate using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (FRAMEGATE_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import re
import tomllib
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from framegate.patterns import compile_pattern

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("FRAMEGATE_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "FRAMEGATE_ENV"
DEFAULT_ENV = "local"

DEFAULT_VALIDATION_PATTERN = r"^ABC-\d+-DEF$"
DEFAULT_VALIDATION_MESSAGE = "Field must match the pattern ABC-<number>-DEF"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


class CandidateOrder(str, Enum):
    """How the candidate sequence around the iframe is ordered."""

    PROXIMITY = "proximity"  # nearest sibling first, level by level outward
    DOCUMENT = "document"  # literal top-to-bottom page order


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class WidgetSettings(BaseSettings):
    """Values handed to the widget by the configuration resolver."""

    model_config = SettingsConfigDict(env_prefix="FRAMEGATE_WIDGET__")

    validation_pattern: str = DEFAULT_VALIDATION_PATTERN
    validation_message: str = DEFAULT_VALIDATION_MESSAGE

    @field_validator("validation_pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            compile_pattern(value)
        except re.error as exc:
            raise ValueError(f"validation_pattern is not a valid regular expression: {exc}") from exc
        return value


class DiscoverySettings(BaseSettings):
    """Discovery pass and retry polling."""

    model_config = SettingsConfigDict(env_prefix="FRAMEGATE_DISCOVERY__")

    retry_interval_sec: float = Field(default=1.0, gt=0)
    candidate_order: CandidateOrder = CandidateOrder.PROXIMITY
    max_candidates: int = Field(default=50_000, ge=1)


class BrowserSettings(BaseSettings):
    """Playwright browser settings for live inspection."""

    model_config = SettingsConfigDict(env_prefix="FRAMEGATE_BROWSER__")

    headless: bool = True
    timeout_ms: int = 30_000
    widget_frame: str = ""  # frame name or URL substring identifying the widget


class LoggingSettings(BaseSettings):
    """Log output configuration."""

    model_config = SettingsConfigDict(env_prefix="FRAMEGATE_LOGGING__")

    level: str = "INFO"
    json_format: bool = False


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root framegate settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="FRAMEGATE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    debug: bool = False

    widget: WidgetSettings = Field(default_factory=WidgetSettings)
    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
