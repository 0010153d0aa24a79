# src/cadastro/tests/test_logging/test_builder_setup.py
import logging

from cadastro.core.logging.builder import make_dict_config, setup_logging
from cadastro.core.logging.filters import ActorFilter


# Create a minimal Settings-like object for testing
class DummySettings:
    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = False
    LOG_DIR = None  # will be set in test
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENV = "development"
    ENABLE_SQL_LOGGING = False


def test_make_dict_config_contains_file_handlers(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path
    cfg = make_dict_config(settings)
    assert "console" in cfg["handlers"]
    # not logging to stdout only, and a LOG_DIR is set: file handlers
    assert "file" in cfg["handlers"]
    assert "error_file" in cfg["handlers"]
    assert "json" in cfg["formatters"]
    assert set(cfg["filters"]) == {"actor", "redact"}
    assert cfg["handlers"]["file"]["filename"].endswith("cadastro.log")


def test_make_dict_config_stdout_only(tmp_path):
    settings = DummySettings()
    settings.LOG_TO_STDOUT = True
    settings.LOG_DIR = tmp_path
    cfg = make_dict_config(settings)
    assert "file" not in cfg["handlers"]
    assert "error_console" in cfg["handlers"]


def test_sql_logging_is_opt_in():
    settings = DummySettings()
    settings.LOG_TO_STDOUT = True
    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    settings.ENABLE_SQL_LOGGING = True
    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path / "logs"
    # ensure DIR does not exist
    assert not settings.LOG_DIR.exists()
    setup_logging(settings)
    try:
        # setup should create log dir
        assert settings.LOG_DIR.exists()
        root = logging.getLogger()
        assert root.handlers
        assert any(isinstance(f, ActorFilter) for f in root.filters)
    finally:
        # put back the session-wide configuration
        settings.LOG_TO_STDOUT = True
        setup_logging(settings)
