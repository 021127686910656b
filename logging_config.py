import logging
import os
from logging.handlers import RotatingFileHandler

LOGS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs")
DEFAULT_LOG_FILE = "nexdrive.log"
LOG_FORMAT = (
    "%(asctime)s %(levelname)-8s "
    "[%(filename)s:%(lineno)d %(funcName)s()] "
    "%(message)s"
)


def configured_level() -> int:
    """Log level from settings.toml ([env] log_level)."""
    from settings_service import SettingsService

    level = logging.getLevelName(SettingsService().log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(name="app", log_file=DEFAULT_LOG_FILE, level=None, max_bytes=5*1024*1024, backup_count=3):
    """Set up a logger with a rotating file handler and a stream handler.

    Log files land in the project's ./logs/ directory unless an absolute
    path is given (tests pass a tmpdir path).

    Args:
        name: The name of the logger, usually the calling module's __name__.
        log_file: The log file name, or an absolute path.
        level: The level of the logger (default: settings.toml log_level).
        max_bytes: The maximum size of the log file before rotation.
        backup_count: The number of rotated files to keep.

    Returns:
        logger: The configured logger.

    Example usage:
    from logging_config import setup_logging
    logger = setup_logging(__name__, log_file="scene_composer.log")
    """
    logger = logging.getLogger(name)
    # Streamlit reruns re-import pages; avoid stacking handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    os.makedirs(LOGS_DIR, exist_ok=True)
    if os.path.isabs(log_file):
        log_path = log_file
    else:
        log_path = os.path.join(LOGS_DIR, os.path.basename(log_file))

    file_handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger.setLevel(level if level is not None else configured_level())
    return logger
