"""Logging configuration and service."""
import json
import logging
import logging.config
from typing import Any, Dict, Optional

from .settings import Settings


class BaseFormatter(logging.Formatter):
    """Base formatter with common functionality."""

    # LogRecord attributes that never count as extra fields
    STANDARD_LOG_RECORD_ATTRIBUTES = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }

    # Option names that carry credentials
    REDACTED_FIELDS = {"api_key", "authorization", "token", "SERVICE_API_KEY"}

    def __init__(self, settings_instance: Settings) -> None:
        """Initialize formatter.

        Args:
            settings_instance: Settings instance for configuration
        """
        super().__init__()
        self.settings = settings_instance

    def get_extra_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Collect extra context attached to a record.

        Credentials are masked and values that cannot be serialized are
        replaced by a short placeholder.

        Args:
            record: Log record to process

        Returns:
            Dictionary with extra fields
        """
        extra: Dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in self.STANDARD_LOG_RECORD_ATTRIBUTES:
                continue
            extra[key] = value

        for field in self.settings.LOG_EXTRA_FIELDS:
            if hasattr(record, field):
                extra[field] = getattr(record, field)

        return {key: self._sanitize(key, value) for key, value in extra.items()}

    def _sanitize(self, key: str, value: Any) -> Any:
        if key in self.REDACTED_FIELDS and value:
            return "***"
        try:
            json.dumps({key: value})
        except (TypeError, OverflowError, ValueError):
            return f"<non-serializable: {type(value).__name__}>"
        return value


class JsonFormatter(BaseFormatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string
        """
        log_data: Dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        log_data.update(self.get_extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class TextFormatter(BaseFormatter):
    """Text formatter for human-readable logging."""

    def format(self, record: logging.LogRecord) -> str:
        msg = (
            f"{self.formatTime(record)} - {record.levelname} - "
            f"{record.name} - {record.getMessage()}"
        )

        extra = self.get_extra_fields(record)
        if extra:
            msg += f" - extra={extra}"

        if record.exc_info:
            msg += f"\n{self.formatException(record.exc_info)}"

        return msg


class StructuredFormatter(BaseFormatter):
    """Structured formatter for key-value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"time={self.formatTime(record)}",
            f"level={record.levelname}",
            f"name={record.name}",
            f"message={record.getMessage()}",
        ]
        parts.extend(
            f"{key}={value}" for key, value in self.get_extra_fields(record).items()
        )

        if record.exc_info:
            parts.append(f"exception={self.formatException(record.exc_info)}")

        return " ".join(parts)


class LoggerService:
    """Service for configuring and providing loggers."""

    def __init__(
        self,
        settings_instance: Settings,
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize logging configuration.

        Args:
            settings_instance: Settings instance to use
            config: Optional logging configuration dictionary
        """
        self.settings = settings_instance
        self.formatters: Dict[str, BaseFormatter] = {
            "json": JsonFormatter(settings_instance),
            "text": TextFormatter(settings_instance),
            "structured": StructuredFormatter(settings_instance),
        }

        if config:
            logging.config.dictConfig(config)
        else:
            # Only the root level is configured here
            root_logger = logging.getLogger()
            root_logger.setLevel(getattr(logging, settings_instance.LOG_LEVEL.upper()))

    def get_logger(self, name: str, format: Optional[str] = None) -> logging.Logger:
        """Get logger instance.

        Args:
            name: Logger name, typically __name__
            format: Optional format override (json, text, structured)

        Returns:
            Logger instance
        """
        logger = logging.getLogger(name)

        # Attach a handler once per logger
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                self.formatters[format or self.settings.LOG_FORMAT]
            )
            logger.addHandler(handler)

        return logger
