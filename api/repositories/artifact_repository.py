"""Repository for rendered certificate files in S3."""

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class ArtifactRepository:
    """Stores rendered certificates as public objects keyed by certificate id."""

    def __init__(
        self,
        s3_client: Any,
        bucket: str,
        public_base_url: str,
        extension: str = "pdf",
    ) -> None:
        self.s3 = s3_client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.extension = extension

    def object_key(self, certificate_id: str) -> str:
        return f"{certificate_id}.{self.extension}"

    def public_url(self, certificate_id: str) -> str:
        """Deterministic URL; valid whether or not the object exists yet."""
        return f"{self.public_base_url}/{self.object_key(certificate_id)}"

    async def upload_pdf(self, certificate_id: str, body: bytes) -> str:
        """Upload (or overwrite) the certificate PDF and return its public URL."""
        key = self.object_key(certificate_id)
        await asyncio.to_thread(
            self.s3.put_object,
            Bucket=self.bucket,
            Key=key,
            ACL="public-read",
            Body=body,
            ContentType=PDF_CONTENT_TYPE,
        )
        logger.info(
            "certificate.artifact.uploaded",
            extra={"bucket": self.bucket, "key": key, "size_bytes": len(body)},
        )
        return self.public_url(certificate_id)
