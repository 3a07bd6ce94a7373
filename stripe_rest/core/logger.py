import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Sets up a logger with a specified name, optional log file, and logging level.
    This function configures a logger to write log messages to the console and,
    when a log file is given, to a rotating file as well. The log messages will
    include the timestamp, logger name, log level, and message.

    Calling it again for the same name updates the level of the logger and of
    its handlers. A console handler is attached once; a file handler is added
    for each new log file.

    Args:
        name (str): The name of the logger.
        log_file (str, optional): The file path where the log messages will be written.
            Defaults to None (console only).
        level (int, optional): The logging level. Defaults to logging.INFO.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Define the log format
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    handlers: list[logging.Handler] = []
    log_files = {
        h.baseFilename for h in logger.handlers if isinstance(h, logging.FileHandler)
    }
    if log_file and os.path.abspath(log_file) not in log_files:
        # File handler (with rotation)
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    has_console = any(
        not isinstance(h, logging.FileHandler) for h in logger.handlers
    )
    if not has_console:
        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    # Add handlers to the logger
    for handler in handlers:
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
