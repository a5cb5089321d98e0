"""Certificate issuance and verification endpoints.

Paths and status codes mirror the deployed Lambda functions so the offline
server and API Gateway are interchangeable for clients. Note that successful
verification answers 201, not 200.
"""

from fastapi import APIRouter, Path
from fastapi.responses import JSONResponse

from core.dependencies import Certificates
from core.logger import bind_contextvars
from schemas import (
    IssueCertificateRequest,
    IssueCertificateResponse,
    MessageResponse,
    ValidationErrorResponse,
    VerifyCertificateResponse,
)
from services.certificates_service import (
    INVALID_MESSAGE,
    ISSUE_FAILED_MESSAGE,
    ISSUED_MESSAGE,
    VALID_MESSAGE,
    CertificateIssueError,
    issue_certificate,
    verify_certificate,
)

router = APIRouter(tags=["certificates"])


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


@router.post(
    "/generateCertificate",
    response_model=IssueCertificateResponse,
    status_code=201,
    responses={
        400: {
            "model": ValidationErrorResponse,
            "description": "Invalid body, or rendering/upload failed",
        },
    },
)
async def generate_certificate_endpoint(
    body: IssueCertificateRequest,
    deps: Certificates,
) -> IssueCertificateResponse | JSONResponse:
    """Issue a certificate and upload the rendered PDF."""
    bind_contextvars(certificate_id=body.id)

    try:
        result = await issue_certificate(
            deps,
            certificate_id=body.id,
            name=body.name,
            grade=body.grade,
        )
    except CertificateIssueError:
        return _message(400, ISSUE_FAILED_MESSAGE)

    return IssueCertificateResponse(message=ISSUED_MESSAGE, url=result.url)


# --- Literal path routes (before parameterized) ---


@router.get(
    "/verifyCertificate",
    status_code=400,
    response_model=MessageResponse,
    include_in_schema=False,
)
async def verify_certificate_missing_id_endpoint() -> JSONResponse:
    """Answer a verification request that carries no id."""
    return _message(400, "Missing certificate id.")


@router.get(
    "/verifyCertificate/{certificate_id}",
    response_model=VerifyCertificateResponse,
    status_code=201,
    responses={400: {"model": MessageResponse, "description": "Invalid certificate"}},
)
async def verify_certificate_endpoint(
    deps: Certificates,
    certificate_id: str = Path(min_length=1),
) -> VerifyCertificateResponse | JSONResponse:
    """Verify a certificate by id (public endpoint)."""
    bind_contextvars(certificate_id=certificate_id)

    result = await verify_certificate(deps, certificate_id)

    if not result.is_valid or result.record is None or result.url is None:
        return _message(400, INVALID_MESSAGE)

    return VerifyCertificateResponse(
        message=VALID_MESSAGE,
        name=result.record.name,
        url=result.url,
    )
