"""
==================================
Pytest suite for core.config.
==================================

Test Coverage:
--------------
- Defaults when no variables are set
- Parsing of levels, booleans, paths and URLs
- ConfigurationError on malformed values
- Global config instance

How to Execute:
---------------
All tests:          pytest tests/tests_core/test_config.py -v
"""

import pytest

from core.config import (
    Config,
    ConfigurationError,
    LoggingConfig,
    ValidationConfig,
    config,
)

# =========================
# UNIT TESTS
# =========================

@pytest.mark.unit
def test_defaults_from_empty_environment():
    """Test an empty environment yields the documented defaults."""
    cfg = Config.from_env({})

    assert cfg.logging == LoggingConfig()
    assert cfg.validation == ValidationConfig()
    assert cfg.log_level == 'INFO'
    assert cfg.validation_url == 'sqlite://'
    assert cfg.logging.log_file is None
    assert cfg.logging.use_colors is True
    assert cfg.validation.echo is False


@pytest.mark.unit
def test_values_from_environment():
    """Test every variable is read and converted."""
    cfg = Config.from_env({
        'DDL_LOG_LEVEL': 'debug',
        'DDL_LOG_FILE': 'ddl.log',
        'DDL_LOG_DIR': '/tmp/ddl',
        'DDL_LOG_COLORS': 'no',
        'DDL_VALIDATION_URL': 'sqlite:///check.db',
        'DDL_VALIDATION_ECHO': 'TRUE',
    })

    assert cfg.log_level == 'DEBUG'
    assert cfg.logging.log_file == 'ddl.log'
    assert cfg.logging.log_dir == '/tmp/ddl'
    assert cfg.logging.use_colors is False
    assert cfg.validation_url == 'sqlite:///check.db'
    assert cfg.validation.echo is True


@pytest.mark.unit
def test_empty_log_file_means_none():
    """Test an empty DDL_LOG_FILE disables file logging."""
    assert Config.from_env({'DDL_LOG_FILE': ''}).logging.log_file is None


@pytest.mark.unit
def test_invalid_log_level_raises():
    """Test an unknown level is rejected."""
    with pytest.raises(ConfigurationError, match="DDL_LOG_LEVEL"):
        Config.from_env({'DDL_LOG_LEVEL': 'LOUD'})


@pytest.mark.unit
def test_invalid_boolean_raises():
    """Test an unparseable boolean is rejected."""
    with pytest.raises(ConfigurationError, match="DDL_VALIDATION_ECHO"):
        Config.from_env({'DDL_VALIDATION_ECHO': 'maybe'})


@pytest.mark.unit
def test_reads_os_environ(monkeypatch):
    """Test os.environ is used when no mapping is given."""
    monkeypatch.setenv('DDL_VALIDATION_URL', 'sqlite:///env.db')

    assert Config.from_env().validation_url == 'sqlite:///env.db'


@pytest.mark.smoke
def test_global_config_instance():
    """Test the module exposes a ready Config."""
    assert isinstance(config, Config)
    assert config.project_root.joinpath('core', 'config.py').exists()
