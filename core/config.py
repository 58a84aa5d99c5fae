"""
==============================================
Configuration management for the DDL builder.
==============================================

Loads settings from environment variables (.env file) and exposes a
centralized Config singleton.

Environment variables:
    DDL_LOG_LEVEL: Logging level (default INFO)
    DDL_LOG_FILE: Optional log file name
    DDL_LOG_DIR: Directory for the log file (default logs)
    DDL_LOG_COLORS: Colored console output (default true)
    DDL_VALIDATION_URL: SQLAlchemy URL of the engine used to check generated
        statements (default sqlite://, an in-memory database)
    DDL_VALIDATION_ECHO: Echo statements sent to that engine (default false)

Example:
    >>> from core.config import config
    >>>
    >>> print(config.log_level, config.validation_url)
    INFO sqlite://
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

_TRUE = ('1', 'true', 'yes', 'on')
_FALSE = ('0', 'false', 'no', 'off', '')


class ConfigurationError(Exception):
    """Exception raised when an environment value cannot be parsed."""
    pass


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{value}'")


def _parse_level(name: str, value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"{name} must be one of {', '.join(LOG_LEVELS)}, got '{value}'"
        )
    return level


@dataclass
class LoggingConfig:
    """Logging configuration settings.

    Attributes:
        level: Root logging level
        log_file: Optional log file name
        log_dir: Directory holding the log file
        use_colors: Colored console output
    """

    level: str = 'INFO'
    log_file: Optional[str] = None
    log_dir: str = 'logs'
    use_colors: bool = True


@dataclass
class ValidationConfig:
    """Settings for the engine used to check generated SQL.

    Attributes:
        database_url: SQLAlchemy database URL
        echo: Echo executed statements
    """

    database_url: str = 'sqlite://'
    echo: bool = False


class Config:
    """Centralized configuration manager.

    Attributes:
        logging: LoggingConfig instance
        validation: ValidationConfig instance
        project_root: Absolute path to the project root

    Example:
        >>> cfg = Config.from_env({'DDL_LOG_LEVEL': 'debug'})
        >>> cfg.log_level
        'DEBUG'
    """

    def __init__(
        self,
        logging: Optional[LoggingConfig] = None,
        validation: Optional[ValidationConfig] = None
    ):
        self.logging = logging or LoggingConfig()
        self.validation = validation or ValidationConfig()
        self.project_root = Path(__file__).parent.parent

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Config instance

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        env = os.environ if environ is None else environ

        logging_config = LoggingConfig(
            level=_parse_level('DDL_LOG_LEVEL', env.get('DDL_LOG_LEVEL', 'INFO')),
            log_file=env.get('DDL_LOG_FILE') or None,
            log_dir=env.get('DDL_LOG_DIR', 'logs'),
            use_colors=_parse_bool('DDL_LOG_COLORS', env.get('DDL_LOG_COLORS', 'true'))
        )
        validation_config = ValidationConfig(
            database_url=env.get('DDL_VALIDATION_URL', 'sqlite://'),
            echo=_parse_bool('DDL_VALIDATION_ECHO', env.get('DDL_VALIDATION_ECHO', 'false'))
        )
        return cls(logging=logging_config, validation=validation_config)

    @property
    def log_level(self) -> str:
        """Get root logging level."""
        return self.logging.level

    @property
    def validation_url(self) -> str:
        """Get the validation engine URL."""
        return self.validation.database_url


# Global configuration instance
config = Config.from_env()
