"""
Configuration Management for StarFlow Applications

Dataclass-based configuration for logging and rendering, with per-environment
defaults and loading from dicts, JSON files and environment variables.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.errors import ConfigurationError
from .scheduler import DEFAULT_FRAME_INTERVAL, AsyncioFrameScheduler, FrameScheduler, ManualFrameScheduler

logger = logging.getLogger(__name__)

SCHEDULERS = ("asyncio", "manual")


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class RenderConfig:
    """Render scheduling configuration"""
    scheduler: str = "asyncio"
    frame_interval: float = DEFAULT_FRAME_INTERVAL

    def __post_init__(self):
        if self.scheduler not in SCHEDULERS:
            raise ConfigurationError(f"Unknown scheduler {self.scheduler!r}; expected one of {SCHEDULERS}")
        if self.frame_interval < 0:
            raise ConfigurationError(f"frame_interval must be >= 0, got {self.frame_interval}")


@dataclass
class ApplicationConfig:
    """Complete application configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    # Custom configuration
    custom: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_environment(cls, environment: Union[Environment, str]) -> 'ApplicationConfig':
        """Create configuration for specific environment"""
        environment = _environment(environment)
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.logging.level = "WARNING"
            config.render.scheduler = "manual"

        elif environment == Environment.PRODUCTION:
            config.debug = False
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary; unknown keys are ignored."""
        if "environment" in config_dict:
            config = cls.for_environment(config_dict["environment"])
        else:
            config = cls()

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        for key, value in config_dict.get("logging", {}).items():
            if hasattr(config.logging, key):
                setattr(config.logging, key, value)

        render = {**asdict(config.render), **{
            key: value for key, value in config_dict.get("render", {}).items() if hasattr(config.render, key)
        }}
        config.render = RenderConfig(**render)

        config.custom.update(config_dict.get("custom", {}))
        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'ApplicationConfig':
        """Load configuration from a JSON file"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix != '.json':
            raise ConfigurationError(f"Unsupported configuration file format: {config_path.suffix}")

        with open(config_path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_environment(cls) -> 'ApplicationConfig':
        """Create configuration from environment variables"""
        config = cls.for_environment(os.getenv('STARFLOW_ENV', 'development'))

        if os.getenv('STARFLOW_DEBUG'):
            config.debug = os.getenv('STARFLOW_DEBUG').lower() == 'true'

        if os.getenv('STARFLOW_LOG_LEVEL'):
            config.logging.level = os.getenv('STARFLOW_LOG_LEVEL').upper()

        render = asdict(config.render)
        if os.getenv('STARFLOW_SCHEDULER'):
            render["scheduler"] = os.getenv('STARFLOW_SCHEDULER').lower()
        if os.getenv('STARFLOW_FRAME_INTERVAL'):
            try:
                render["frame_interval"] = float(os.getenv('STARFLOW_FRAME_INTERVAL'))
            except ValueError:
                raise ConfigurationError(
                    f"STARFLOW_FRAME_INTERVAL must be a number, got {os.getenv('STARFLOW_FRAME_INTERVAL')!r}"
                ) from None
        config.render = RenderConfig(**render)

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "logging": asdict(self.logging),
            "render": asdict(self.render),
            "custom": self.custom,
        }


def _environment(value: Union[Environment, str]) -> Environment:
    if isinstance(value, Environment):
        return value
    try:
        return Environment(str(value).lower())
    except ValueError:
        raise ConfigurationError(f"Unknown environment {value!r}") from None


def make_scheduler(render: RenderConfig) -> FrameScheduler:
    """Build the frame scheduler described by `render`."""
    if render.scheduler == "manual":
        return ManualFrameScheduler()
    return AsyncioFrameScheduler(frame_interval=render.frame_interval)


# Handlers installed by configure_logging, replaced on every call
_installed_handlers = []


def configure_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the `starflow` logger from `config`.

    Installs a console handler and, when `file_path` is set, a rotating file
    handler. Calling it again replaces the handlers installed previously.
    """
    config = config or get_config().logging
    package_logger = logging.getLogger("starflow")

    for handler in _installed_handlers:
        package_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level {config.level!r}")

    formatter = logging.Formatter(config.format)
    handlers = [logging.StreamHandler()]
    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        _installed_handlers.append(handler)

    package_logger.setLevel(level)
    logger.debug(f"logging configured at {config.level}")
    return package_logger


# Global configuration management
_current_config: Optional[ApplicationConfig] = None


def set_config(config: ApplicationConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config


def get_config() -> ApplicationConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        # Auto-create from environment if not set
        _current_config = ApplicationConfig.from_environment()

    return _current_config


def configure_from_dict(config_dict: Dict[str, Any]) -> ApplicationConfig:
    """Configure application from dictionary"""
    config = ApplicationConfig.from_dict(config_dict)
    set_config(config)
    return config


def configure_from_file(config_path: Union[str, Path]) -> ApplicationConfig:
    """Configure application from file"""
    config = ApplicationConfig.from_file(config_path)
    set_config(config)
    return config
