"""Structured logging configuration using structlog.

Error responses and retry sleeps are logged through structlog; this module
routes those events (and stdlib records from uvicorn/starlette) through one
stdlib handler. Production emits JSON lines with structured tracebacks,
development a colored console.
"""

import logging
import sys
from functools import partial

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Third-party loggers that would otherwise duplicate request logging
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "asyncio": logging.WARNING,
}


def add_service_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
    *,
    service: str,
    version: str,
) -> EventDict:
    """Tag every event with the emitting service and its version."""
    event_dict.setdefault("service", service)
    event_dict.setdefault("version", version)
    return event_dict


def _pre_chain(service: str, version: str) -> list[Processor]:
    """Processors shared by structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        partial(add_service_context, service=service, version=version),
    ]


def _final_processors(production: bool) -> list[Processor]:
    """Exception formatting and rendering for the chosen environment."""
    if production:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    service: str = "waiter-errors",
    version: str = "0.1.0",
) -> None:
    """Configure structlog and the root stdlib logger.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        environment: "production" selects JSON output, anything else console
        service: Value of the ``service`` field on every event
        version: Value of the ``version`` field on every event
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    production = environment.lower() == "production"
    pre_chain = _pre_chain(service, version)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_final_processors(production),
            ],
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if production else "console",
    )
