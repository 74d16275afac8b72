"""
Logging configuration for the studio site API.

- Structured JSON logging in production, readable console output elsewhere
- Correlation ID (trace_id) injection from the trace middleware
- Environment-aware default log levels
"""

import logging

import structlog


class CorrelationIdFilter(logging.Filter):
    """
    Copy trace_id from the structlog context onto standard logging records,
    so uvicorn and other stdlib loggers carry it too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        contextvars = structlog.contextvars.get_contextvars()
        record.correlation_id = contextvars.get("trace_id", "")
        return True


def configure_structlog(environment: str) -> None:
    """
    Configure structlog on top of stdlib logging so that
    logger.info("event", key=val) works everywhere.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if environment == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]


def get_log_level(environment: str, configured: str = "") -> str:
    """
    Resolve the root log level.

    An explicit level from Settings.log_level wins; otherwise each
    environment has its own default.
    """
    log_level = configured.strip().upper()

    if log_level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        return log_level

    defaults = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return defaults.get(environment, "INFO")


def configure_logging(environment: str, log_level: str = "") -> None:
    """
    Initialize logging for the application. Call once at startup.
    """
    configure_structlog(environment)

    logging.getLogger().setLevel(get_log_level(environment, log_level))

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
