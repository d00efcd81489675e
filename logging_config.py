"""
Centralized logging configuration for ShopCheckout.

Every module logs through a child of the "shop_checkout" logger. Records
carry the name of the thread that produced them, so concurrent HTTP requests
against the same ledger can be told apart.

Features:
    - Thread name in all log messages
    - Console output (always enabled, stderr so receipts on stdout stay clean)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages

Log Format:
    2026-10-16 10:15:30 [INFO    ] [MainThread] shop_checkout.app - Starting ShopCheckout
    2026-10-16 10:15:31 [INFO    ] [Thread-3] shop_checkout.models.cart - Added 2x Cheese to cart (1 lines)
    2026-10-16 10:15:32 [WARNING ] [Thread-4] shop_checkout.services.checkout_service - Checkout refused: ...

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=False)

    # In modules
    logger = get_logger(__name__)
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

APP_LOGGER_NAME = "shop_checkout"


# =============================================================================
# THREAD CONTEXT FILTER
# =============================================================================

class ThreadContextFilter(logging.Filter):
    """
    Logging filter that adds thread context to all log records.

    Adds `thread_name` and `thread_id` attributes used by the format string.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        current_thread = threading.current_thread()
        record.thread_name = current_thread.name
        record.thread_id = threading.get_ident()

        # Context only, never drops a record
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def _make_file_handler(
    path: Path,
    level: int,
    formatter: logging.Formatter,
    thread_filter: logging.Filter,
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,  # 10 MB per file
        backupCount=5,
        encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(thread_filter)
    return handler


def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure application logging with thread context.

    Args:
        app_name: Name of the application logger (default: "shop_checkout")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs next to this file)
        enable_file_logging: Whether to write rotating log files
        stream: Console stream (default: sys.stderr)

    Returns:
        Configured application logger

    Example:
        # Development
        logger = setup_logging(log_level=logging.DEBUG)

        # Production
        logger = setup_logging(log_level=logging.INFO, enable_file_logging=True)
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    # Allows re-configuration
    logger.handlers.clear()

    # Format: timestamp [level] [thread_name] logger_name - message
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    thread_filter = ThreadContextFilter()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(thread_filter)
    logger.addHandler(console_handler)

    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        logger.addHandler(_make_file_handler(app_log_file, log_level, formatter, thread_filter))

        # ERROR and CRITICAL only
        error_log_file = log_dir / f"{app_name}_error.log"
        logger.addHandler(_make_file_handler(error_log_file, logging.ERROR, formatter, thread_filter))

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger under the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance, e.g. "shop_checkout.services.ledger"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
