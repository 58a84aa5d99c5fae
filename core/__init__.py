"""
========================================
Configuration and logging infrastructure.
========================================

Modules:
    config: Configuration loaded from environment variables
    logger: Centralized logging setup

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Validating against {config.validation_url}")
"""

__version__ = "0.1.0"
__all__ = ['get_logger', 'setup_logging', 'config', 'Config', 'ConfigurationError']

from core.config import Config, ConfigurationError, config
from core.logger import get_logger, setup_logging
