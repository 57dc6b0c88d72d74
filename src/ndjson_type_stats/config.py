"""Optional YAML configuration file, validated with pydantic."""

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ndjson_type_stats.chunking.types import BUFFER_SIZE, MIN_WINDOW_SIZE
from ndjson_type_stats.errors import ConfigError
from ndjson_type_stats.solver.execution import default_worker_count

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class RunConfig(BaseModel):
    """Settings for one run; every field has a default so the file is optional."""

    model_config = ConfigDict(extra="forbid")

    input_file: str = "small.log"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    worker_count: int = Field(default_factory=default_worker_count, ge=1)
    executor: Literal["threads", "processes", "serial"] | None = None
    include_terminator: bool = True
    window_size: int = Field(default=BUFFER_SIZE, ge=MIN_WINDOW_SIZE)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> RunConfig:
    """
    Load ``path`` into a RunConfig.

    A missing file means defaults. An unreadable file, YAML that is not a
    mapping, or values that fail validation raise ConfigError.
    """
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except FileNotFoundError:
        logger.debug("Config file %s not found, using defaults", config_path)
        return RunConfig()
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

    if raw is None:
        return RunConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping at the top level")

    try:
        return RunConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {config_path}: {exc}") from exc
