"""AWS Lambda entrypoints for API Gateway proxy events.

Each module exposes ``handler(event, context)``. Collaborators are built once
per cold start and reused across warm invocations.
"""

import json
import logging
from functools import lru_cache
from typing import Any

from core.config import get_settings
from core.dependencies import CertificateDependencies, build_dependencies
from core.logger import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

LambdaResponse = dict[str, Any]


@lru_cache(maxsize=1)
def get_dependencies() -> CertificateDependencies:
    return build_dependencies(get_settings())


def clear_dependencies_cache() -> None:
    """Drop the cached collaborators (tests, settings changes)."""
    get_dependencies.cache_clear()


def json_response(status_code: int, body: dict[str, Any]) -> LambdaResponse:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def request_id_from(context: Any) -> str | None:
    return getattr(context, "aws_request_id", None)
