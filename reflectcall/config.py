"""
Configuration management for reflectcall.

Loads config.yaml from the reflectcall home directory
(REFLECTCALL_HOME, default ~/.config/reflectcall).
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from reflectcall.errors import ConfigError


LOG_FORMATS = ("pretty", "structured")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ReflectCallConfig:
    """
    Dispatch behaviour and logging settings.

    Attributes:
        capture_stack: Embed formatted traceback text in InvocationFault
        payload_echo_limit: Max characters of a raw payload echoed in DecodeError
        strict_decode: Use pydantic strict mode when decoding raw payloads
            (set false to allow lax coercions such as "2" -> 2)
        log_level: Logging level for the reflectcall logger
        log_format: "pretty" (rich console) or "structured" (JSON lines)
        log_file: Optional log file path
        env_file: Optional .env file loaded into the environment
    """
    capture_stack: bool = True
    payload_echo_limit: int = 500
    strict_decode: bool = True
    log_level: str = "INFO"
    log_format: str = "pretty"
    log_file: Optional[str] = None
    env_file: Optional[str] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate configuration values."""
        for name in ("capture_stack", "strict_decode"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")
        limit = self.payload_echo_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ConfigError(
                f"payload_echo_limit must be a non-negative integer, got {limit!r}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigError(
                f"log_format must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}"
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {self.log_level}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReflectCallConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def get_reflectcall_home() -> Path:
    """Return the reflectcall home directory."""
    home = os.environ.get("REFLECTCALL_HOME")
    if home:
        return Path(home)
    return Path("~/.config/reflectcall").expanduser()


def load_config(config_path: Optional[Path] = None) -> ReflectCallConfig:
    """
    Load reflectcall configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to <home>/config.yaml

    Returns:
        ReflectCallConfig instance

    Raises:
        FileNotFoundError: If the config file does not exist
        ConfigError: If the file is not valid YAML or has invalid values
    """
    if config_path is None:
        config_path = get_reflectcall_home() / "config.yaml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"reflectcall config.yaml not found at {config_path}. Run `reflectcall init`."
        )

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

    config = ReflectCallConfig.from_dict(data)

    if config.env_file:
        env_path = Path(config.env_file).expanduser()
        if env_path.exists():
            load_dotenv(env_path)

    return config
