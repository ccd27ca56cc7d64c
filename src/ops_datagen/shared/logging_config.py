"""Logging configuration for structured logging."""
import logging
import sys


def configure_structured_logging(level: str = "INFO", json_output: bool = True):
    """Configure structured logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s" if json_output else "%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )

    # Disable excessive third-party logging
    logging.getLogger("numexpr").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
