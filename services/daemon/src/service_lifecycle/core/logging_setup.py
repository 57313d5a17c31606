"""Centralized logging setup for the lifecycle daemon.

Configures the root logger to write to stdout/stderr only.
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single console handler.

    Args:
        level: Log level name applied to the root logger and the handler
    """
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if not any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        console.setLevel(level.upper())
        root_logger.addHandler(console)
