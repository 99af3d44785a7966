"""Configuration management for Dialy."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .adapters.kv_diary_repo import STORAGE_KEY
from .core.diary import DEFAULT_PAST_YEARS
from .validation import MAX_PAST_YEARS

logger = logging.getLogger(__name__)

DIALY_HOME = Path(os.environ.get("DIALY_HOME", Path.home() / "dialy"))
CONFIG_FILE = DIALY_HOME / "config" / "dialy.conf"
DATA_DIR = DIALY_HOME / "data"


@dataclass
class Config:
    """Dialy configuration."""

    data_dir: str = ""
    storage_key: str = STORAGE_KEY
    past_years: int = DEFAULT_PAST_YEARS
    preview_length: int = 100
    log_level: str = "WARNING"

    def resolved_data_dir(self) -> Path:
        """Configured data directory, or the default under DIALY_HOME."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _parse_value(value: str) -> str:
    """Strip quotes, or inline comments from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key.upper()}: {value!r}")
        return default


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from dialy.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _parse_value(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "storage_key":
                config.storage_key = value or STORAGE_KEY
            case "past_years":
                years = _parse_int(key, value, config.past_years)
                if not 1 <= years <= MAX_PAST_YEARS:
                    logger.warning(f"PAST_YEARS must be between 1 and {MAX_PAST_YEARS}, got {years}")
                    years = min(max(years, 1), MAX_PAST_YEARS)
                config.past_years = years
            case "preview_length":
                config.preview_length = max(_parse_int(key, value, config.preview_length), 1)
            case "log_level":
                config.log_level = value.upper()

    return config
