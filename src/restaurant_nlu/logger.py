"""
Logging setup

Provides one-time configuration of the root logger with console and file
output, optionally formatted as JSON for structured log collection.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler

from pythonjsonlogger import jsonlogger

# Default log formats
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_DIR = "logs"

# Set once the root logger has been configured
_logging_configured = False


def configure_logging(
    log_level=DEFAULT_LOG_LEVEL,
    log_format=DEFAULT_LOG_FORMAT,
    json_format=DEFAULT_JSON_FORMAT,
    log_to_console=True,
    log_to_file=False,
    log_dir=DEFAULT_LOG_DIR,
    log_file_name="restaurant-nlu.log",
    log_file_max_size=10 * 1024 * 1024,  # 10MB
    log_file_backup_count=5,
    use_rotating_file=True,
    use_json_formatter=False,
    force=False,
):
    """
    Configure the root logger

    Args:
        log_level: Log level, as a ``logging`` constant or level name
        log_format: Plain text format string
        json_format: JSON format string
        log_to_console: Whether to log to stderr
        log_to_file: Whether to log to a file under ``log_dir``
        log_dir: Directory for log files
        log_file_name: Log file name
        log_file_max_size: Maximum size of a rotating log file in bytes
        log_file_backup_count: Number of rotated files to keep
        use_rotating_file: Rotate by size instead of at midnight
        use_json_formatter: Emit JSON records
        force: Reconfigure even if logging was already configured
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper(), DEFAULT_LOG_LEVEL)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_json_formatter:
        formatter = jsonlogger.JsonFormatter(json_format)
    else:
        formatter = logging.Formatter(log_format)

    # The REPL owns stdout, so console logs go to stderr
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        log_file_path = os.path.join(log_dir, log_file_name)

        if use_rotating_file:
            file_handler = RotatingFileHandler(
                log_file_path,
                maxBytes=log_file_max_size,
                backupCount=log_file_backup_count,
                encoding="utf-8"
            )
        else:
            file_handler = TimedRotatingFileHandler(
                log_file_path,
                when="midnight",
                backupCount=log_file_backup_count,
                encoding="utf-8"
            )

        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _logging_configured = True


def configure_logging_from_config(logging_config) -> None:
    """
    Configure logging from a ``LoggingConfig`` section

    Args:
        logging_config: LoggingConfig instance
    """
    configure_logging(
        log_level=logging_config.level,
        log_to_console=logging_config.log_to_console,
        log_to_file=logging_config.log_to_file,
        log_dir=logging_config.dir,
        log_file_name=logging_config.file,
        use_json_formatter=logging_config.use_json,
    )


def get_logger(name):
    """
    Get a named logger

    Args:
        name: Logger name

    Returns:
        logging.Logger instance
    """
    return logging.getLogger(name)
