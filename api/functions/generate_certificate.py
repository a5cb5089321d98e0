"""IssueCertificate Lambda: POST /generateCertificate."""

import asyncio
import base64
import binascii
import json
import logging
from typing import Any

from pydantic import ValidationError

from core.logger import bind_contextvars, clear_contextvars
from functions import LambdaResponse, get_dependencies, json_response, request_id_from
from schemas import IssueCertificateRequest
from services.certificates_service import (
    ISSUE_FAILED_MESSAGE,
    ISSUED_MESSAGE,
    CertificateIssueError,
    issue_certificate,
)

logger = logging.getLogger(__name__)


def _parse_body(event: dict[str, Any]) -> IssueCertificateRequest:
    """Raises ValueError for a missing/non-JSON body, ValidationError otherwise."""
    raw = event.get("body")
    if raw is None:
        raise ValueError("Request body is required")
    if event.get("isBase64Encoded") and isinstance(raw, str | bytes):
        try:
            raw = base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            raise ValueError("Request body is not valid base64") from e
    payload = json.loads(raw) if isinstance(raw, str | bytes) else raw
    return IssueCertificateRequest.model_validate(payload)


def handler(event: dict[str, Any], context: Any = None) -> LambdaResponse:
    clear_contextvars()
    bind_contextvars(
        request_id=request_id_from(context), function="generateCertificate"
    )

    try:
        body = _parse_body(event)
    except ValidationError as e:
        logger.warning(
            "request.validation_error", extra={"error_count": e.error_count()}
        )
        return json_response(
            400,
            {
                "message": "Invalid request.",
                "errors": [
                    {"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()
                ],
            },
        )
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        logger.warning("request.invalid_body", extra={"error": str(e)})
        return json_response(400, {"message": "Invalid request."})

    bind_contextvars(certificate_id=body.id)

    try:
        result = asyncio.run(
            issue_certificate(
                get_dependencies(),
                certificate_id=body.id,
                name=body.name,
                grade=body.grade,
            )
        )
    except CertificateIssueError:
        return json_response(400, {"message": ISSUE_FAILED_MESSAGE})

    return json_response(201, {"message": ISSUED_MESSAGE, "url": result.url})
