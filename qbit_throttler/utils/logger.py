"""
Logging configuration using loguru.
"""
import sys
from pathlib import Path
from loguru import logger
from qbit_throttler.config import Settings
from qbit_throttler.constants import LOG_FILE_RETENTION, LOG_FILE_ROTATION
from qbit_throttler.utils.correlation import cycle_id_filter


def setup_logger(settings: Settings):
    """Configure loguru logger with poll cycle ID support."""
    # Remove default handler
    logger.remove()

    # Add console handler with cycle ID
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <dim>{extra[cycle_id]}</dim> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=settings.log_level,
        colorize=True,
        filter=cycle_id_filter,
    )

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            rotation=LOG_FILE_ROTATION,
            retention=LOG_FILE_RETENTION,
            level=settings.log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[cycle_id]} | {name}:{function}:{line} - {message}",
            filter=cycle_id_filter,
        )

    logger.debug(f"Logger initialized at {settings.log_level}")
