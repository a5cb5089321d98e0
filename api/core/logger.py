"""structlog setup shared by the API, the Lambda handlers and the CLI.

Deployed functions write one JSON object per line to CloudWatch; offline runs
get console output. Modules keep using ``logging.getLogger(__name__)`` with
``extra=`` fields, and the request or invocation context (request_id,
certificate_id, Lambda function name) is merged into every line.

Set LOG_FORMAT=json|console to override the choice and LOG_LEVEL for the level.
"""

import logging
import os
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars
from structlog.types import EventDict, Processor

__all__ = [
    "bind_contextvars",
    "clear_contextvars",
    "configure_logging",
    "get_logger",
]

_TRUTHY = {"1", "true", "yes", "on"}


def _add_lambda_context(
    _logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag log entries with the Lambda function name and version when deployed."""
    function_name = os.environ.get("AWS_LAMBDA_FUNCTION_NAME")
    if function_name:
        event_dict.setdefault("function_name", function_name)
        event_dict.setdefault(
            "function_version", os.environ.get("AWS_LAMBDA_FUNCTION_VERSION")
        )
    return event_dict


def _get_log_level() -> int:
    """Get log level from environment, defaulting to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _is_json_format() -> bool:
    """Determine if JSON output is enabled."""
    log_format = os.environ.get("LOG_FORMAT", "").lower()
    if log_format == "json":
        return True
    if log_format == "console":
        return False
    # Offline runs get a readable console; anything deployed gets JSON
    return os.environ.get("IS_OFFLINE", "").lower() not in _TRUTHY


def configure_logging() -> None:
    """Route stdlib and structlog records through one stdout handler.

    Each call replaces the root handlers, including the one the Lambda
    runtime installs.
    """
    log_level = _get_log_level()
    use_json = _is_json_format()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        _add_lambda_context,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if use_json:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True, exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Third-party logs (uvicorn, botocore) get the same formatting
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    # The Lambda runtime installs its own handler on the root logger;
    # replace it so every line goes through the structlog formatter.
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """structlog logger for code that logs key-value pairs directly (the CLI)."""
    return structlog.stdlib.get_logger(name)
