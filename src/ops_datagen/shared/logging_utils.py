"""Structured logging utilities for generation and rollup runs."""
import json
import logging
import uuid
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, Iterator, Optional


class StructuredLogger:
    """
    JSON run logger.

    Every entry carries the id of the run it belongs to, so the log lines of
    one ``generate()`` or ``run_many()`` call can be pulled out of a shared
    stream.
    """

    def __init__(self, logger_name: str, prefix: str = "RUN"):
        self.logger = logging.getLogger(logger_name)
        self.prefix = prefix
        self._correlation_id: Optional[str] = None

    @property
    def correlation_id(self) -> Optional[str]:
        return self._correlation_id

    def new_correlation_id(self) -> str:
        return f"{self.prefix}_{uuid.uuid4().hex[:12]}"

    @contextmanager
    def run(self) -> Iterator[str]:
        """Tag entries with a fresh run id until the block exits, however it exits."""
        self._correlation_id = self.new_correlation_id()
        try:
            yield self._correlation_id
        finally:
            self._correlation_id = None

    def _entry(self, level: str, message: str, context: dict[str, Any]) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            "correlation_id": self._correlation_id or "none",
        }
        if context:
            entry["context"] = context
        # dates, Decimals and numpy scalars fall back to str
        return json.dumps(entry, default=str)

    def info(self, message: str, **context: Any):
        self.logger.info(self._entry("INFO", message, context))

    def warning(self, message: str, **context: Any):
        self.logger.warning(self._entry("WARNING", message, context))

    def error(self, message: str, **context: Any):
        self.logger.error(self._entry("ERROR", message, context))


def get_structured_logger(name: str, prefix: str = "RUN") -> StructuredLogger:
    """Get a structured logger for a module."""
    return StructuredLogger(name, prefix)
