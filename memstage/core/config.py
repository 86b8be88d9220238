"""
Configuration management for memstage
"""

import os
import logging
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import ConfigError

logger = logging.getLogger('memstage.config')

CONFIG_ENV_VAR = 'MEMSTAGE_CONFIG'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class MemStageConfig(BaseModel):
    """Settings for a staging context

    Example YAML::

        save_dir: ./out
        max_total_bytes: 268435456
        log_level: DEBUG
        env:
          DATA_ROOT: /srv/data
    """
    save_dir: Optional[str] = None  # None saves each buffer to its own path
    env: Dict[str, str] = Field(default_factory=dict)
    max_total_bytes: Optional[int] = None  # warn above this, never evict
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator('max_total_bytes')
    @classmethod
    def validate_max_total_bytes(cls, v):
        if v is not None and v <= 0:
            raise ValueError(f"max_total_bytes must be positive, got {v}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level


def load_config(path: Optional[str] = None) -> MemStageConfig:
    """Load configuration from a YAML file.

    Without a path the file named by $MEMSTAGE_CONFIG is used; when that is
    unset too the defaults apply.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return MemStageConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        config = MemStageConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return config
