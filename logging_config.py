"""
Centralized logging configuration for Wing Planner.

Flask may serve requests on several threads, and each request works on its
own copy of a draft, so every log line carries the thread name.

Features:
    - Automatic thread name in all log messages
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages
    - Helper functions for getting loggers with consistent naming

Log Format:
    2025-11-03 10:15:30 [INFO    ] [MainThread] wing_planner.app - Starting application
    2025-11-03 10:15:31 [INFO    ] [Thread-3] wing_planner.services.draft_service - Preset applied
    2025-11-03 10:15:32 [DEBUG   ] [Thread-3] wing_planner.draft.a1b2c3d4 - Draft saved

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)
    logger.info("This message includes thread context automatically")

    # For a single draft
    draft_logger = get_draft_logger("a1b2c3d4")
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


APP_LOGGER_NAME = "wing_planner"


# =============================================================================
# THREAD CONTEXT FILTER
# =============================================================================

class ThreadContextFilter(logging.Filter):
    """
    Logging filter that adds thread context to all log records.

    Adds ``thread_name`` and ``thread_id`` to each record; the format string
    uses ``thread_name`` to show which request thread logged the message.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        current_thread = threading.current_thread()
        record.thread_name = current_thread.name
        record.thread_id = threading.get_ident()

        # Always allow the record through (we're adding context, not filtering)
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure the "wing_planner" logger tree used by routes, services and drafts.

    ``create_app`` calls this once per app and hands the resulting handlers to
    Flask's own logger, so request errors and planner messages share one
    stream. Module loggers (``get_logger``) and per-draft loggers
    (``get_draft_logger``) are children of this logger and need no handlers
    of their own. The logger does not propagate to the root logger.

    Handlers:
        - stdout, always on (the only handler in development and tests)
        - ``<app_name>.log`` and ``<app_name>_error.log`` rotating files,
          10 MB x 5 each, when ``enable_file_logging`` is set (production)

    Calling it again replaces the previous handlers, which keeps repeated
    ``create_app`` calls in the test suite from duplicating output.

    Args:
        app_name: Name of the root logger (default: "wing_planner")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    # Remove any existing handlers (allows re-configuration)
    logger.handlers.clear()

    # Format: timestamp [level] [thread_name] logger_name - message
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    thread_filter = ThreadContextFilter()

    # ---------------------------------------------------------------------
    # Console Handler (always enabled)
    # ---------------------------------------------------------------------
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(thread_filter)
    logger.addHandler(console_handler)

    # ---------------------------------------------------------------------
    # File Handlers (optional)
    # ---------------------------------------------------------------------
    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"

        log_dir.mkdir(parents=True, exist_ok=True)

        # Main application log (all levels)
        app_log_file = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(thread_filter)
        logger.addHandler(file_handler)

        # Error log (ERROR and CRITICAL only)
        error_log_file = log_dir / f"{app_name}_error.log"
        error_handler = RotatingFileHandler(
            filename=error_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(thread_filter)
        logger.addHandler(error_handler)

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger with the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under "wing_planner", e.g.
        "modules.preset_allocator" -> "wing_planner.modules.preset_allocator"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def get_draft_logger(draft_id: str) -> logging.Logger:
    """
    Get a logger for a specific draft.

    Only the first 8 characters of the draft id are used, which keeps lines
    short while still letting you grep the log for one customer's draft.

    Args:
        draft_id: Draft identifier (usually a uuid4 hex string)

    Returns:
        Logger named "wing_planner.draft.<short id>"
    """
    short_id = draft_id[:8] if len(draft_id) >= 8 else draft_id
    return logging.getLogger(f"{APP_LOGGER_NAME}.draft.{short_id}")
