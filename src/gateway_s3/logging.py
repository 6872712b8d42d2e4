import logging
import os
import sys

from pythonjsonlogger import jsonlogger

_REDACTED = "[redacted]"
_SECRET_FIELDS = ("secret_key", "session_token", "password")


class SecretRedactingFilter(logging.Filter):
    """Blanks out credential material passed through `extra`."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in _SECRET_FIELDS:
            if getattr(record, field, None):
                setattr(record, field, _REDACTED)
        return True


def setup_logging():
    """
    Configures structured JSON logging for the gateway.

    Installs one stdout handler with a JSON formatter (timestamp, level,
    logger name, message, trace_id, span_id) on the root logger and on the
    Uvicorn loggers, so access logs and request logs share a format. The
    level comes from LOG_LEVEL (default INFO). Secret fields passed through
    `extra` are redacted before formatting.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    stream_handler.addFilter(SecretRedactingFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [stream_handler]

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = [stream_handler]
        u_logger.propagate = False

    return root_logger
