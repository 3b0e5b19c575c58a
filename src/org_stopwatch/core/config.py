"""Configuration loading for Org Stopwatch."""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from org_stopwatch.core.split_tree import DEFAULT_MAX_SPLITS

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "org-stopwatch" / "config.json"
DEFAULT_DEBUG_LOG = Path.home() / ".org-stopwatch" / "debug.log"


class ConfigError(Exception):
    """Raised when a config file cannot be parsed or validated."""


class StopwatchConfig(BaseModel):
    """Settings for an interactive stopwatch run."""

    log_file: Path = Path.home() / "org" / "done.org"
    max_splits: int = Field(default=DEFAULT_MAX_SPLITS, ge=1)
    tick_interval: float = Field(default=0.05, gt=0)
    debug_log: Optional[Path] = None


def load_config(path: Optional[Path] = None) -> StopwatchConfig:
    """Load config from JSON, falling back to defaults if the file is absent."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return StopwatchConfig()

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config in {config_path} must be a JSON object")

    try:
        return StopwatchConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e


def apply_overrides(config: StopwatchConfig, **overrides: Any) -> StopwatchConfig:
    """Return a copy with every non-None override applied and validated."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config
    try:
        return StopwatchConfig(**{**config.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid option: {e}") from e


def save_config(config: StopwatchConfig, path: Optional[Path] = None) -> Path:
    """Write config as JSON and return where it went."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config.model_dump(mode="json"), indent=2))
    return config_path
