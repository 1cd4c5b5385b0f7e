# src/error_reporting/tests/test_logging/test_builder_setup.py
import logging
from error_reporting.config.settings import Settings
from error_reporting.core.logging.builder import make_dict_config, setup_logging
from error_reporting.core.logging.formatters import ColorFormatter
from error_reporting.core.logging.handlers import CONSOLE_LOGGER


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        ENV="development",
        LOG_FORMAT="json",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=False,
        LOG_DIR=tmp_path,
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
    )
    values.update(overrides)
    return Settings(**values)


def test_make_dict_config_contains_file_handlers(tmp_path):
    cfg = make_dict_config(make_settings(tmp_path))
    assert set(cfg["handlers"]) == {"console", "reports", "file", "error_file"}
    assert cfg["loggers"][""]["handlers"] == ["console", "file", "error_file"]
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert "json" in cfg["formatters"]
    assert set(cfg["filters"]) == {"request_id", "redact"}


def test_make_dict_config_stdout_only(tmp_path):
    cfg = make_dict_config(make_settings(tmp_path, LOG_TO_STDOUT=True))
    assert list(cfg["handlers"]) == ["console", "reports"]
    assert cfg["loggers"][""]["handlers"] == ["console"]


def test_text_format_uses_color_formatter(tmp_path):
    cfg = make_dict_config(make_settings(tmp_path, LOG_FORMAT="TEXT", LOG_LEVEL="debug"))
    assert cfg["formatters"]["standard"]["()"] is ColorFormatter
    assert cfg["handlers"]["console"]["formatter"] == "standard"
    assert cfg["handlers"]["console"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path, isolated_logging):
    settings = make_settings(tmp_path / "logs")
    assert not settings.LOG_DIR.exists()
    setup_logging(settings)
    assert settings.LOG_DIR.exists()
    assert logging.getLogger().handlers


def test_console_report_logger_accepts_every_level(tmp_path):
    cfg = make_dict_config(make_settings(tmp_path, LOG_LEVEL="WARNING"))

    reports = cfg["loggers"][CONSOLE_LOGGER]
    assert reports["level"] == "DEBUG"
    assert reports["propagate"] is False
    assert reports["handlers"] == ["reports", "file", "error_file"]
    assert cfg["handlers"]["reports"]["level"] == "DEBUG"
    assert cfg["handlers"]["console"]["level"] == "WARNING"
