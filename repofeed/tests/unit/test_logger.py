from unittest.mock import patch

import pytest

from repofeed.config import settings
from repofeed.utils.logger import LOG_BACKUPS, MAX_LOG_BYTES, logger, setup_logger


@pytest.fixture(autouse=True)
def restore_console_logger():
    yield
    with patch("repofeed.config.settings.LOG_DRIVER", "console"):
        setup_logger()


@patch("repofeed.config.settings.LOG_DRIVER", "console")
def test_console_driver(capsys):
    """Test that the console driver routes logs to stdout and stderr correctly."""
    setup_logger()

    logger.debug("This is a debug message")
    logger.info("This is an info message")
    logger.warning("This is a warning message")
    logger.error("This is an error message")

    captured = capsys.readouterr()
    assert "This is a debug message" in captured.out
    assert "This is an info message" in captured.out
    assert "This is a warning message" not in captured.out
    assert "This is a warning message" in captured.err
    assert "This is an error message" in captured.err


@patch("repofeed.config.settings.LOG_DRIVER", "file")
@patch("repofeed.utils.logger.RotatingFileHandler")
def test_file_driver(mock_rotating_file_handler):
    """Test that the file driver uses RotatingFileHandler."""
    mock_instance = mock_rotating_file_handler.return_value

    setup_logger()

    mock_rotating_file_handler.assert_called_once_with(
        settings.LOG_FILE, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS
    )
    mock_instance.setFormatter.assert_called_once()
    assert logger.handlers == [mock_instance]


@patch("repofeed.config.settings.LOG_DRIVER", "syslog")
@patch("repofeed.utils.logger.SysLogHandler")
def test_syslog_driver(mock_syslog_handler):
    mock_instance = mock_syslog_handler.return_value

    setup_logger()

    mock_syslog_handler.assert_called_once_with()
    assert mock_instance in logger.handlers


@patch("repofeed.config.settings.LOG_DRIVER", "invalid_driver")
def test_invalid_driver():
    with pytest.raises(ValueError) as excinfo:
        setup_logger()

    assert "Invalid LOG_DRIVER: invalid_driver" in str(excinfo.value)
