"""
Logging configuration for the Dottie API using Loguru.
"""

from pathlib import Path

from loguru import logger

from dottie.config import DEBUG, LOG_DIR, LOG_LEVEL, LOG_TO_FILE


def setup_logging():
    """Configure Loguru logging for the application."""

    # Remove default handler
    logger.remove()

    # Console logging
    logger.add(
        sink=lambda msg: print(msg, end=""),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level="DEBUG" if DEBUG else LOG_LEVEL,
        colorize=True,
        backtrace=True,
        diagnose=DEBUG,
    )

    if not LOG_TO_FILE:
        logger.info("Logging configuration completed (console only)")
        return logger

    log_dir = Path(LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    # File logging - application logs
    logger.add(
        sink=log_dir / "app.log",
        rotation="500 MB",
        retention="10 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        backtrace=True,
        diagnose=DEBUG,
        enqueue=True,
        compression="zip",
    )

    # File logging - error logs only
    logger.add(
        sink=log_dir / "error.log",
        rotation="100 MB",
        retention="30 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="ERROR",
        backtrace=True,
        diagnose=True,
        enqueue=True,
        compression="zip",
    )

    # File logging - access logs (HTTP requests)
    logger.add(
        sink=log_dir / "access.log",
        rotation="200 MB",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {message}",
        filter=lambda record: record["extra"].get("access_log", False),
        enqueue=True,
        compression="zip",
    )

    logger.info("Logging configuration completed")
    return logger


# Access records are routed to access.log through the bound flag
access_logger = logger.bind(access_log=True)


def get_access_logger():
    """Get the access logger instance."""
    return access_logger
