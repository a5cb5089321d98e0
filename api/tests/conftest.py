"""Pytest configuration and shared fixtures.

This module provides:
- Environment defaults applied before any Settings are built
- In-memory fakes for the DynamoDB table, the S3 client and the PDF renderer
- A CertificateDependencies container wired to those fakes
- FastAPI test client for route tests
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("IS_OFFLINE", "false")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from core.config import Settings, clear_settings_cache
from core.dependencies import CertificateDependencies
from rendering.certificates import CertificateTemplate
from repositories.artifact_repository import ArtifactRepository
from repositories.certificate_repository import CertificateRepository
from tests.fakes import (
    TEST_BASE_URL,
    TEST_BUCKET,
    FakeCertificateTable,
    FakePdfRenderer,
    FakeS3Client,
)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        is_offline=False,
        certificates_table="users_certificate",
        certificates_bucket=TEST_BUCKET,
    )


# =============================================================================
# Fakes
# =============================================================================


@pytest.fixture
def certificate_table() -> FakeCertificateTable:
    return FakeCertificateTable()


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def pdf_renderer() -> FakePdfRenderer:
    return FakePdfRenderer()


@pytest.fixture
def certificate_template(test_settings: Settings) -> CertificateTemplate:
    """The real bundled template and medal asset."""
    return CertificateTemplate(test_settings.templates_dir_path)


@pytest.fixture
def deps(
    certificate_table: FakeCertificateTable,
    s3_client: FakeS3Client,
    pdf_renderer: FakePdfRenderer,
    certificate_template: CertificateTemplate,
) -> CertificateDependencies:
    return CertificateDependencies(
        records=CertificateRepository(certificate_table),
        artifacts=ArtifactRepository(
            s3_client, bucket=TEST_BUCKET, public_base_url=TEST_BASE_URL
        ),
        template=certificate_template,
        renderer=pdf_renderer,
    )


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def app(deps: CertificateDependencies) -> AsyncGenerator[FastAPI]:
    """FastAPI app wired to the in-memory fakes."""
    # Import here so environment defaults above are applied first
    from main import app as fastapi_app

    fastapi_app.state.dependencies = deps

    yield fastapi_app

    fastapi_app.state.dependencies = None


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing routes."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio backend for anyio (required by httpx)."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Reset settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
