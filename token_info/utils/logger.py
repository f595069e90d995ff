import os
import sys

from loguru import logger


def setup_logger(*, level: str = "INFO", log_file: str = "") -> None:
    """Configure loguru for the CLI.

    Console goes to stderr so stdout carries only the token reports.
    Console level controlled by LOG_LEVEL env (default: INFO).
    When log_file is set, a DEBUG file sink is added for post-mortem analysis.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    logger.add(
        sys.stderr,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
            "<level>{message}</level>"
        ),
        level=console_level,
        colorize=True,
    )

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="3 days",
            compression="gz",
            level="DEBUG",
        )
