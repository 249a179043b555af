"""Logging setup and structured logging for generation calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class StructuredGenerationLogger:
    """Structured logger for upstream generation calls."""

    def log_call(
        self,
        operation: str,
        outcome: str,
        latency_ms: float,
        model: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log one upstream call with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if model:
            log_data["model"] = model
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Generation call: {operation} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
