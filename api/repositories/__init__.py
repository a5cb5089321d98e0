"""Repository layer for record-store and object-store access."""

from repositories.artifact_repository import ArtifactRepository
from repositories.certificate_repository import CertificateRepository

__all__ = [
    "ArtifactRepository",
    "CertificateRepository",
]
