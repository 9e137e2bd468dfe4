"""Back-office configuration.

Settings are read from the environment; a ``.env`` file at the repository
root is loaded first when present.

Variables:
- BACKOFFICE_LATENCY_MS: simulated latency per service call (default 500)
- BACKOFFICE_LOW_STOCK_THRESHOLD: products below this stock are "low" (default 5)
- BACKOFFICE_RECENT_SALES_LIMIT: length of the recent-sales list (default 5)
- BACKOFFICE_SEED_SAMPLE_DATA: seed stores with sample records (default true)
- BACKOFFICE_LOG_LEVEL: logging level name (default INFO)
- BACKOFFICE_LOG_JSON: emit JSON log lines (default false)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Load .env file if it exists
from dotenv import load_dotenv
env_path = Path(__file__).resolve().parents[1] / ".env"
if env_path.exists():
    load_dotenv(env_path)


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if parsed < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {parsed}")
    return parsed


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {value!r}")


@dataclass
class Settings:
    """Runtime settings for the back-office services."""
    latency_ms: int = 500
    low_stock_threshold: int = 5
    recent_sales_limit: int = 5
    seed_sample_data: bool = True
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def latency_seconds(self) -> float:
        return self.latency_ms / 1000

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from BACKOFFICE_* environment variables.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        settings = cls(
            latency_ms=_env_int("BACKOFFICE_LATENCY_MS", 500),
            low_stock_threshold=_env_int("BACKOFFICE_LOW_STOCK_THRESHOLD", 5),
            recent_sales_limit=_env_int("BACKOFFICE_RECENT_SALES_LIMIT", 5),
            seed_sample_data=_env_bool("BACKOFFICE_SEED_SAMPLE_DATA", True),
            log_level=os.getenv("BACKOFFICE_LOG_LEVEL", "INFO"),
            log_json=_env_bool("BACKOFFICE_LOG_JSON", False),
        )
        settings.log_level_number  # validate early
        return settings


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process settings (read from the environment once)."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
