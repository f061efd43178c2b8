"""
Engine settings.

Loaded from defaults, then an optional YAML file (explicit path or the
KUNDALI_CONFIG environment variable), then environment overrides:
  - KUNDALI_ENV                (production | development)
  - KUNDALI_DEFAULT_TZ_OFFSET  (hours, used for unknown timezones)
  - LOG_LEVEL
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Optional

import yaml

DEFAULT_TZ_OFFSET = 5.5    # IST


@dataclass(frozen=True)
class Settings:
    environment:       str = "production"
    default_tz_offset: float = DEFAULT_TZ_OFFSET
    log_level:         str = "INFO"

    @property
    def strict_timezones(self) -> bool:
        """Unknown timezones raise instead of falling back."""
        return self.environment == "development"


def _load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    known = {f.name for f in fields(Settings)}
    return {k: v for k, v in data.items() if k in known}


def load_settings(path: Optional[str] = None) -> Settings:
    settings = Settings()

    path = path or os.getenv("KUNDALI_CONFIG")
    if path:
        settings = replace(settings, **_load_yaml(path))

    env = os.getenv("KUNDALI_ENV")
    if env:
        settings = replace(settings, environment=env.strip().lower())
    offset = os.getenv("KUNDALI_DEFAULT_TZ_OFFSET")
    if offset:
        settings = replace(settings, default_tz_offset=float(offset))
    level = os.getenv("LOG_LEVEL")
    if level:
        settings = replace(settings, log_level=level.upper())

    return replace(settings, default_tz_offset=float(settings.default_tz_offset))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
