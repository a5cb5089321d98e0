"""Pydantic schemas for API request/response validation."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

# S3 object keys are limited to 1024 UTF-8 bytes; leave room for ".<extension>"
MAX_CERTIFICATE_ID_BYTES = 1000


class IssueCertificateRequest(BaseModel):
    """Request to issue a certificate."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    grade: str = Field(min_length=1)

    @field_validator("name", "grade")
    @classmethod
    def strip_and_require(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        # The id is the record key, the object key and a URL path segment,
        # so it is stored exactly as sent.
        if v != v.strip():
            raise ValueError("must not have leading or trailing whitespace")
        if "/" in v:
            raise ValueError("must not contain '/'")
        if len(v.encode("utf-8")) > MAX_CERTIFICATE_ID_BYTES:
            raise ValueError(
                f"must be at most {MAX_CERTIFICATE_ID_BYTES} bytes when UTF-8 encoded"
            )
        return v


class MessageResponse(BaseModel):
    """Generic response carrying only a message."""

    message: str


class IssueCertificateResponse(BaseModel):
    """Response for a successful issuance."""

    message: str
    url: str


class VerifyCertificateResponse(BaseModel):
    """Response for a valid certificate."""

    message: str
    name: str
    url: str


class ValidationErrorResponse(BaseModel):
    """Response for malformed input."""

    message: str
    errors: list[dict[str, Any]] = []


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    offline: bool
