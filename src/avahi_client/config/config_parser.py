"""Configuration loading for the avahi-client command line tool.

Brief:
  Reads an optional YAML file and validates it with pydantic models. The
  resulting AvahiClientConfig selects the D-Bus address and carries the
  ``logging`` mapping consumed by init_logging().

Inputs:
  - Path to a YAML config file, or None for defaults.

Outputs:
  - AvahiClientConfig instance.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, validator

from .logging_config import LEVELS

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a config file cannot be read or does not validate."""


class LoggingConfig(BaseModel):
    """Brief: Typed ``logging`` section.

    Inputs:
      - level: debug | info | warn | warning | error | crit | critical.
      - stderr: bool, log to stderr.
      - file: Optional log file path.
      - syslog: bool or mapping with address/facility/tag.

    Outputs:
      - LoggingConfig instance.
    """

    level: str = Field(default="info")
    stderr: bool = True
    file: Optional[str] = None
    syslog: Union[bool, Dict[str, Any]] = False

    @validator("level", pre=True)
    def _normalize_level(cls, v):  # type: ignore[no-untyped-def]
        s = str(v or "info").strip().lower()
        if s not in LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return s

    class Config:
        extra = "forbid"


class AvahiClientConfig(BaseModel):
    """Brief: Top-level avahi-client configuration.

    Inputs:
      - bus_address: Optional D-Bus address (e.g. ``unix:path=/run/dbus/system_bus_socket``);
        None uses the system bus.
      - logging: LoggingConfig.

    Outputs:
      - AvahiClientConfig instance.
    """

    bus_address: Optional[str] = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @validator("bus_address", pre=True)
    def _blank_address_is_none(cls, v):  # type: ignore[no-untyped-def]
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    class Config:
        extra = "forbid"


def model_to_dict(model: BaseModel) -> Dict[str, Any]:
    """Brief: Convert a pydantic model to a plain dict across pydantic versions."""

    for attr in ("model_dump", "dict"):
        method = getattr(model, attr, None)
        if callable(method):
            return dict(method())
    return dict(model)  # pragma: no cover


def parse_config(data: Any, *, source: str = "<config>") -> AvahiClientConfig:
    """Brief: Validate an already-parsed config mapping.

    Inputs:
      - data: Parsed YAML document (None is treated as empty).
      - source: Label used in error messages.

    Outputs:
      - AvahiClientConfig.

    Raises:
      - ConfigError: Root is not a mapping or validation fails.
    """

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: configuration root must be a mapping")
    try:
        return AvahiClientConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"{source}: invalid configuration: {exc}") from exc


def load_config(config_path: Optional[str]) -> AvahiClientConfig:
    """Brief: Read and validate a YAML config file.

    Inputs:
      - config_path: Path to the file, or None for built-in defaults.

    Outputs:
      - AvahiClientConfig.

    Raises:
      - ConfigError: File unreadable, YAML invalid or validation fails.

    Example:
      >>> load_config(None).bus_address is None
      True
    """

    if config_path is None:
        return AvahiClientConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"{config_path}: cannot read config: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"{config_path}: invalid YAML: {exc}") from exc

    cfg = parse_config(data, source=config_path)
    logger.debug("Loaded config from %s", config_path)
    return cfg
