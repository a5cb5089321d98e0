"""Repository for certificate record operations."""

import asyncio
import logging
from typing import Any

from botocore.exceptions import ClientError

from models import CertificateRecord, now_millis

logger = logging.getLogger(__name__)

_CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


class CertificateRepository:
    """Repository for the certificates DynamoDB table.

    Takes a boto3 ``Table`` resource (or anything with the same
    ``get_item``/``put_item`` surface). boto3 is blocking, so every call is
    dispatched to a worker thread.
    """

    def __init__(self, table: Any) -> None:
        self.table = table

    async def get_by_id(self, certificate_id: str) -> CertificateRecord | None:
        """Point lookup by primary key."""
        response = await asyncio.to_thread(
            self.table.get_item,
            Key={"id": certificate_id},
            ConsistentRead=True,
        )
        item = response.get("Item")
        return CertificateRecord.from_item(item) if item else None

    async def create(
        self,
        certificate_id: str,
        name: str,
        grade: str,
    ) -> bool:
        """Insert a record unless one already exists for this id.

        Uses a conditional put so two concurrent first issuances cannot both
        write. Losing that race is not an error: the record exists, which is
        all the caller asked for.

        Returns:
            True if this call inserted the record, False if it already existed.
        """
        record = CertificateRecord(
            id=certificate_id,
            name=name,
            grade=grade,
            created_at=now_millis(),
        )
        try:
            await asyncio.to_thread(
                self.table.put_item,
                Item=record.to_item(),
                ConditionExpression="attribute_not_exists(id)",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != _CONDITIONAL_CHECK_FAILED:
                raise
            logger.info(
                "certificate.record.exists",
                extra={"certificate_id": certificate_id},
            )
            return False
        return True

    async def get_or_create(
        self,
        certificate_id: str,
        name: str,
        grade: str,
    ) -> bool:
        """Create the record if the lookup finds none.

        Returns:
            True if a new record was inserted by this call.
        """
        existing = await self.get_by_id(certificate_id)
        if existing is not None:
            return False
        return await self.create(certificate_id, name, grade)
