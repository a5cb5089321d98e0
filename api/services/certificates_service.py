"""Certificate business logic.

This module handles the certificate workflows:
- Issuance: create-if-absent record, render, convert to PDF, upload
- Verification: look up a record and build its public URL

Routes and Lambda entrypoints should delegate all certificate logic here.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

from core.dependencies import CertificateDependencies
from models import CertificateRecord
from rendering.certificates import build_template_data

logger = logging.getLogger(__name__)

ISSUED_MESSAGE = "Certificate created successfully."
ISSUE_FAILED_MESSAGE = "Could not generate certificate."
VALID_MESSAGE = "Valid certificate."
INVALID_MESSAGE = "Invalid certificate."

IssueFailureKind = Literal["render", "conversion", "upload"]


class CertificateIssueError(Exception):
    """Raised when a certificate could not be rendered or stored.

    Subclasses record which step failed for the logs; callers only ever see
    one generic failure.
    """

    kind: IssueFailureKind

    def __init__(self, certificate_id: str, message: str | None = None):
        self.certificate_id = certificate_id
        super().__init__(
            message or f"Certificate {certificate_id} failed at {self.kind} step"
        )


class CertificateRenderError(CertificateIssueError):
    """Template or medal asset could not be loaded or rendered."""

    kind = "render"


class CertificateConversionError(CertificateIssueError):
    """The browser failed to produce the PDF."""

    kind = "conversion"


class CertificateUploadError(CertificateIssueError):
    """The PDF could not be written to the object store."""

    kind = "upload"


def _issue_failed(
    error_cls: type[CertificateIssueError],
    certificate_id: str,
    cause: Exception,
) -> CertificateIssueError:
    error = error_cls(certificate_id)
    logger.error(
        "certificate.issue.failed",
        extra={
            "certificate_id": certificate_id,
            "failure_kind": error.kind,
            "error": str(cause),
        },
        exc_info=cause,
    )
    return error


@dataclass(frozen=True)
class IssueCertificateResult:
    certificate_id: str
    url: str
    record_created: bool


@dataclass(frozen=True)
class CertificateVerificationResult:
    is_valid: bool
    record: CertificateRecord | None
    url: str | None


async def issue_certificate(
    deps: CertificateDependencies,
    certificate_id: str,
    name: str,
    grade: str,
    *,
    issued_at: datetime | None = None,
) -> IssueCertificateResult:
    """Issue (or re-issue) a certificate.

    The record is created only if absent, so the stored name/grade/created_at
    always come from the first issuance. The document, however, is rendered
    from this request's name and grade and re-uploaded on every call,
    overwriting any earlier file for the same id.

    Args:
        deps: Record store, object store, template and renderer
        certificate_id: Caller-supplied certificate id
        name: Holder's name to print
        grade: Grade label to print
        issued_at: Issuance time (defaults to now, UTC)

    Returns:
        IssueCertificateResult with the public URL

    Raises:
        CertificateRenderError: If the template or medal could not be rendered
        CertificateConversionError: If PDF conversion failed
        CertificateUploadError: If the upload failed
    """
    issued_at = issued_at or datetime.now(UTC)

    record_created = await deps.records.get_or_create(certificate_id, name, grade)
    if record_created:
        logger.info(
            "certificate.record.created", extra={"certificate_id": certificate_id}
        )

    try:
        data = build_template_data(
            certificate_id=certificate_id,
            name=name,
            grade=grade,
            issued_at=issued_at,
            medal=deps.template.load_medal(),
        )
        html = deps.template.render(data)
    except Exception as e:
        raise _issue_failed(CertificateRenderError, certificate_id, e) from e

    try:
        pdf = await deps.renderer.render(html)
    except Exception as e:
        raise _issue_failed(CertificateConversionError, certificate_id, e) from e

    try:
        url = await deps.artifacts.upload_pdf(certificate_id, pdf)
    except Exception as e:
        raise _issue_failed(CertificateUploadError, certificate_id, e) from e

    logger.info(
        "certificate.issued",
        extra={
            "certificate_id": certificate_id,
            "record_created": record_created,
            "size_bytes": len(pdf),
        },
    )

    return IssueCertificateResult(
        certificate_id=certificate_id,
        url=url,
        record_created=record_created,
    )


async def verify_certificate(
    deps: CertificateDependencies,
    certificate_id: str,
) -> CertificateVerificationResult:
    """Look up a certificate by id.

    Returns:
        CertificateVerificationResult; ``url`` is only set for valid certificates
    """
    record = await deps.records.get_by_id(certificate_id)

    if record is None:
        logger.info(
            "certificate.verify.miss", extra={"certificate_id": certificate_id}
        )
        return CertificateVerificationResult(is_valid=False, record=None, url=None)

    return CertificateVerificationResult(
        is_valid=True,
        record=record,
        url=deps.artifacts.public_url(certificate_id),
    )
