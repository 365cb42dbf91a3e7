"""Configuration management for Weekwise."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

WEEKWISE_HOME = Path(os.environ.get("WEEKWISE_HOME", Path.home() / "weekwise"))
CONFIG_FILE = WEEKWISE_HOME / "config" / "weekwise.conf"
DATA_DIR = WEEKWISE_HOME / "data"


@dataclass
class Config:
    """Weekwise configuration."""

    data_dir: str = ""
    timezone: str = ""
    strategy_day: str = "Sunday"
    pomodoro_minutes: int = 25
    log_level: str = "WARNING"

    @property
    def data_path(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from weekwise.conf file."""
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
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "strategy_day":
                config.strategy_day = value.capitalize()
            case "pomodoro_minutes":
                try:
                    minutes = int(value)
                except ValueError:
                    logger.warning(f"Ignoring POMODORO_MINUTES={value!r}: not an integer")
                    continue
                if minutes > 0:
                    config.pomodoro_minutes = minutes
                else:
                    logger.warning(f"Ignoring POMODORO_MINUTES={value!r}: must be positive")
            case "log_level":
                config.log_level = value.upper()
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
