"""Configuration management for Cadence."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from cadence.core.dates import MAX_RANGE_DAYS

logger = logging.getLogger(__name__)

CADENCE_HOME = Path(os.environ.get("CADENCE_HOME", Path.home() / "cadence"))
CONFIG_FILE = CADENCE_HOME / "config" / "cadence.conf"
DATA_DIR = CADENCE_HOME / "data"


@dataclass
class Config:
    """Cadence configuration."""

    data_dir: str = ""
    timezone: str = "UTC"
    daily_run_time: str = "06:00"
    recurring_horizon_days: int = 14
    notify_webhook_url: str = ""
    log_level: str = "INFO"

    @property
    def resolved_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from cadence.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value.startswith(('"', "'")):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "daily_run_time":
                config.daily_run_time = value
            case "recurring_horizon_days":
                days = _parse_int(key, value, config.recurring_horizon_days)
                config.recurring_horizon_days = max(0, min(days, MAX_RANGE_DAYS))
            case "notify_webhook_url":
                config.notify_webhook_url = value
            case "log_level":
                config.log_level = value.upper()

    return config
