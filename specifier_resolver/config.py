"""
Logging setup and environment configuration for the specifier resolver.
"""

import os
import logging
import logging.handlers
from pathlib import Path


def setup_logging(log_level: str = None, log_file: str = None):
    """Setup logging configuration for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
    """
    # Get log level from environment or use WARNING as default
    level = (log_level or os.environ.get('LOG_LEVEL', 'WARNING')).upper()
    log_level = getattr(logging, level, logging.WARNING)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler (stderr, stdout carries the rewritten specifiers)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.debug(f"Logging configured with level: {level}")


def get_config():
    """Get application configuration from environment variables."""
    return {
        'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'WARNING'),
        'LOG_FILE': os.environ.get('LOG_FILE') or None,
        'NODE_BINARY': os.environ.get('NODE_BINARY', 'node'),
        'RESOLVER_CONFIG': os.environ.get('RESOLVER_CONFIG') or None,
    }
