import json
import logging
import sys

logger = logging.getLogger("sitesync")
logger.setLevel(logging.INFO)


def configure_logging(level: int = logging.INFO) -> None:
    """Send JSON log lines to stderr (command-line use)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False


class StructuredLogger:
    """
    One JSON object per record for deployment runs.

    Keyword arguments (run_id, distribution_id, target_uri, paths_count, ...)
    become top-level fields so a run can be followed with jq or a log search.
    """

    @staticmethod
    def info(message: str, **kwargs) -> None:
        """Pipeline progress: stage start, counts, identifiers."""
        log_data = {"level": "INFO", "message": message, **kwargs}
        logger.info(json.dumps(log_data, default=str))

    @staticmethod
    def error(message: str, exception: Exception = None, **kwargs) -> None:
        """Log error level with exception details."""
        log_data = {
            "level": "ERROR",
            "message": message,
            **kwargs,
        }
        if exception:
            log_data["exception"] = str(exception)
            log_data["exception_type"] = type(exception).__name__

        logger.error(json.dumps(log_data, default=str))

    @staticmethod
    def warning(message: str, **kwargs) -> None:
        """Advisories and degraded results; the run continues."""
        log_data = {"level": "WARNING", "message": message, **kwargs}
        logger.warning(json.dumps(log_data, default=str))

    @staticmethod
    def debug(message: str, **kwargs) -> None:
        """Log debug level with structured data."""
        log_data = {"level": "DEBUG", "message": message, **kwargs}
        logger.debug(json.dumps(log_data, default=str))
