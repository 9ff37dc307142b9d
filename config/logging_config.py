"""
Logging Configuration
"""
import logging
import logging.handlers
import sys
import json
from contextvars import ContextVar
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime, timezone

from config.settings import settings


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON

        Args:
            record: Log record

        Returns:
            JSON formatted string
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Request scoped fields
        for field in ("request_id", "query", "domain"):
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }

        # Add custom fields from extra
        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for development"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m'   # Magenta
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[levelname]}{self.BOLD}"
                f"{levelname:8}"
                f"{self.RESET}"
            )

        record.timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]

        return super().format(record)


class LoggingConfig:
    """Centralized logging configuration"""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    CONSOLE_FORMAT_DEV = (
        "%(timestamp)s │ %(levelname)-17s │ "
        "%(name)-28s │ %(message)s"
    )

    FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def setup(
        cls,
        log_level: Optional[str] = None,
        log_file: Optional[Path] = None,
        enable_console: bool = True,
        enable_file: Optional[bool] = None,
        enable_json: Optional[bool] = None
    ) -> None:
        """Setup logging configuration

        Args:
            log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to log file
            enable_console: Enable console output
            enable_file: Enable file output (defaults to settings.log_to_file)
            enable_json: Enable JSON formatting (auto-detected if None)
        """
        if log_level is None:
            log_level = "DEBUG" if settings.debug else settings.log_level

        numeric_level = getattr(logging, log_level.upper(), logging.INFO)

        if enable_json is None:
            enable_json = settings.is_production()

        if enable_file is None:
            enable_file = settings.log_to_file

        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)
        root_logger.handlers.clear()

        if enable_console:
            cls._setup_console_handler(root_logger, numeric_level, enable_json)

        if enable_file:
            if log_file is None:
                log_file = settings.log_dir / f"{settings.app_env}.log"
            cls._setup_file_handler(root_logger, numeric_level, log_file, enable_json)

        cls._setup_access_logger()
        cls._configure_third_party_loggers(numeric_level)

        logger = logging.getLogger(__name__)
        logger.info(
            f"✅ Logging configured: level={log_level}, "
            f"env={settings.app_env}, json={enable_json}"
        )

    @classmethod
    def _setup_console_handler(
        cls,
        logger: logging.Logger,
        level: int,
        use_json: bool
    ) -> None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if use_json:
            console_handler.setFormatter(JSONFormatter())
        elif settings.is_development():
            console_handler.setFormatter(ColoredFormatter(cls.CONSOLE_FORMAT_DEV))
        else:
            console_handler.setFormatter(logging.Formatter(cls.DEFAULT_FORMAT))

        logger.addHandler(console_handler)

    @classmethod
    def _setup_file_handler(
        cls,
        logger: logging.Logger,
        level: int,
        log_file: Path,
        use_json: bool
    ) -> None:
        """Setup file handler with rotation (10MB max, keep 5 backups)"""
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)

        if use_json:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(cls.FILE_FORMAT))

        logger.addHandler(file_handler)

    @classmethod
    def _setup_access_logger(cls) -> None:
        """Access logger (for HTTP requests), separate file in production"""
        access_logger = logging.getLogger("access")
        access_logger.setLevel(logging.INFO)
        access_logger.propagate = False
        access_logger.handlers.clear()

        if settings.is_production():
            access_file = settings.log_dir / "access.log"
            access_file.parent.mkdir(parents=True, exist_ok=True)

            access_handler = logging.handlers.TimedRotatingFileHandler(
                access_file,
                when="midnight",
                interval=1,
                backupCount=30
            )
            access_handler.setFormatter(
                logging.Formatter('%(asctime)s - %(message)s')
            )
            access_logger.addHandler(access_handler)

    @classmethod
    def _configure_third_party_loggers(cls, level: int) -> None:
        """Configure third-party library loggers"""
        noisy_loggers = [
            "urllib3",
            "httpx",
            "httpcore",
            "hpack",
            "aiohttp",
            "asyncio",
            "dns",
            "uvicorn.access",
            "supabase",
            "postgrest"
        ]

        for logger_name in noisy_loggers:
            logger = logging.getLogger(logger_name)
            logger.setLevel(logging.WARNING if level <= logging.INFO else level)

        logging.getLogger("uvicorn").setLevel(level)
        logging.getLogger("uvicorn.error").setLevel(level)
        logging.getLogger("fastapi").setLevel(level)


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    **kwargs
) -> None:
    """Convenience function to setup logging

    Args:
        log_level: Log level
        log_file: Log file path
        **kwargs: Additional configuration
    """
    LoggingConfig.setup(
        log_level=log_level,
        log_file=Path(log_file) if log_file else None,
        **kwargs
    )


_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def _install_context_factory() -> None:
    """Wrap the record factory once so records pick up the active context"""
    base_factory = logging.getLogRecordFactory()
    if getattr(base_factory, "adds_log_context", False):
        return

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return record

    record_factory.adds_log_context = True
    logging.setLogRecordFactory(record_factory)


class LogContext:
    """Context manager for adding context to logs

    Fields live in a context variable, so concurrent requests each see only
    their own values and nested contexts add to the outer one.
    """

    def __init__(self, **kwargs):
        self.context = kwargs
        self.token = None

    def __enter__(self):
        _install_context_factory()
        self.token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self.token)


def log_metric(logger: logging.Logger, metric_name: str, value: float, tags: Dict[str, Any]):
    """Log metric for monitoring

    Args:
        logger: Logger instance
        metric_name: Metric name
        value: Metric value
        tags: Metric tags
    """
    logger.info(
        f"Metric: {metric_name}={value}",
        extra={'extra_fields': {
            'metric': metric_name,
            'value': value,
            'tags': tags,
            'type': 'metric'
        }}
    )
