"""Explicitly constructed collaborators for the certificate workflow.

The FastAPI app builds one CertificateDependencies at startup and stores it on
``app.state``; the Lambda entrypoints build one per cold start. Tests swap in
fakes by constructing the container directly.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from core.aws import create_boto3_session, create_certificates_table, create_s3_client
from core.config import Settings
from rendering.certificates import CertificateTemplate
from rendering.pdf import LaunchProfile, PdfRenderer
from repositories.artifact_repository import ArtifactRepository
from repositories.certificate_repository import CertificateRepository


@dataclass(frozen=True)
class CertificateDependencies:
    """Record store, object store, template and renderer for one deployment."""

    records: CertificateRepository
    artifacts: ArtifactRepository
    template: CertificateTemplate
    renderer: PdfRenderer


def build_dependencies(settings: Settings) -> CertificateDependencies:
    session = create_boto3_session(settings)
    return CertificateDependencies(
        records=CertificateRepository(create_certificates_table(settings, session)),
        artifacts=ArtifactRepository(
            create_s3_client(settings, session),
            bucket=settings.certificates_bucket,
            public_base_url=settings.public_bucket_base_url,
            extension=settings.artifact_extension,
        ),
        template=CertificateTemplate(
            settings.templates_dir_path,
            template_name=settings.template_name,
            medal_asset_name=settings.medal_asset_name,
        ),
        renderer=PdfRenderer(LaunchProfile.from_settings(settings)),
    )


def get_dependencies(request: Request) -> CertificateDependencies:
    return request.app.state.dependencies


Certificates = Annotated[CertificateDependencies, Depends(get_dependencies)]
