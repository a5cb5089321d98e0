"""VerifyCertificate Lambda: GET /verifyCertificate/{id}."""

import asyncio
import logging
from typing import Any

from core.logger import bind_contextvars, clear_contextvars
from functions import LambdaResponse, get_dependencies, json_response, request_id_from
from services.certificates_service import (
    INVALID_MESSAGE,
    VALID_MESSAGE,
    verify_certificate,
)

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: Any = None) -> LambdaResponse:
    clear_contextvars()
    bind_contextvars(
        request_id=request_id_from(context), function="verifyCertificate"
    )

    certificate_id = (event.get("pathParameters") or {}).get("id")
    if not certificate_id:
        logger.warning("request.missing_path_parameter", extra={"parameter": "id"})
        return json_response(400, {"message": "Missing certificate id."})

    bind_contextvars(certificate_id=certificate_id)

    result = asyncio.run(verify_certificate(get_dependencies(), certificate_id))

    if not result.is_valid or result.record is None:
        return json_response(400, {"message": INVALID_MESSAGE})

    return json_response(
        201,
        {
            "message": VALID_MESSAGE,
            "name": result.record.name,
            "url": result.url,
        },
    )
