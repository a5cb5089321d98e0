"""Record-store models for the certificates table.

DynamoDB items are plain dicts; these dataclasses are the typed view of them.
Attribute names match the table's existing items (``created_at`` in snake case).
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any


def now_millis() -> int:
    """Current time as milliseconds since the epoch."""
    return int(datetime.now(UTC).timestamp() * 1000)


@dataclass(frozen=True)
class CertificateRecord:
    """One issued certificate.

    Immutable once written: re-issuing an existing id never updates it.
    """

    id: str
    name: str
    grade: str
    created_at: int

    def to_item(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "grade": self.grade,
            "created_at": self.created_at,
        }

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "CertificateRecord":
        # boto3's resource layer hands numbers back as Decimal
        created_at = item.get("created_at", 0)
        if isinstance(created_at, Decimal):
            created_at = int(created_at)
        return cls(
            id=str(item["id"]),
            name=str(item.get("name", "")),
            grade=str(item.get("grade", "")),
            created_at=int(created_at),
        )
