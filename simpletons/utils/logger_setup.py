"""
Colored logging setup for simpletons.

loguru configuration with colored console output and optional file logging.
"""

from datetime import datetime, timezone
import os
import sys

from loguru import logger


def setup_logger(
    log_dir: str | None = None,
    level: str = "INFO",
    rotation: str = "50 MB",
    retention: str = "30 days",
    enable_colors: bool = True,
) -> str | None:
    """
    Set up colored console logging and, when *log_dir* is given, a rotating file log.

    Args:
        log_dir: Directory for log files (console only if None)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation: Log rotation policy (e.g., "50 MB", "1 day")
        retention: Log retention policy (e.g., "30 days", "1 month")
        enable_colors: Whether to enable colored console output

    Returns:
        Path to the log file, or None when logging to the console only
    """
    # Remove any existing handlers to avoid duplicates
    logger.remove()

    colorize = enable_colors and sys.stderr.isatty()
    if colorize:
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<blue>{function}</blue>:<yellow>{line}</yellow> | "
            "<level>{message}</level>"
        )
    else:
        console_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message}"
        )

    logger.add(
        sys.stderr,
        level=level,
        format=console_format,
        colorize=colorize,
        backtrace=True,
        diagnose=True,
    )

    log_file = None
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(log_dir, f"simpletons_{timestamp}.log")

        # No colors in file
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation=rotation,
            retention=retention,
            compression="zip",
            encoding="utf-8",
            backtrace=True,
            diagnose=True,
        )

    logger.info(
        f"Logger initialized at level {level}"
        + (f", logging to console and {log_file}" if log_file else ", console only")
    )
    return log_file


def setup_logger_from_settings(settings) -> str | None:
    """Configure logging from a ``LoggingSettings`` model."""
    return setup_logger(
        log_dir=settings.log_dir,
        level=settings.level,
        enable_colors=settings.enable_colors,
    )
