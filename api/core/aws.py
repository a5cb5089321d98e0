"""AWS client construction for the record store and the object store.

Clients are built explicitly from settings and handed to repositories;
nothing in the service layer reaches for a global boto3 client.
"""

import logging
from typing import Any

import boto3
from botocore.config import Config

from core.config import Settings

logger = logging.getLogger(__name__)

# Every external call is attempted exactly once per invocation
_NO_RETRIES = Config(retries={"total_max_attempts": 1, "mode": "standard"})


def create_boto3_session(settings: Settings) -> boto3.session.Session:
    return boto3.session.Session(region_name=settings.aws_region)


def _client_kwargs(settings: Settings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"config": _NO_RETRIES}
    if settings.aws_endpoint_url:
        kwargs["endpoint_url"] = settings.aws_endpoint_url
    return kwargs


def create_certificates_table(
    settings: Settings,
    session: boto3.session.Session | None = None,
) -> Any:
    """DynamoDB ``Table`` resource for the certificates table."""
    session = session or create_boto3_session(settings)
    dynamodb = session.resource("dynamodb", **_client_kwargs(settings))
    logger.info(
        "aws.dynamodb.table.configured",
        extra={
            "table": settings.certificates_table,
            "endpoint_url": settings.aws_endpoint_url or None,
        },
    )
    return dynamodb.Table(settings.certificates_table)


def create_s3_client(
    settings: Settings,
    session: boto3.session.Session | None = None,
) -> Any:
    """S3 client used to upload rendered certificates."""
    session = session or create_boto3_session(settings)
    logger.info(
        "aws.s3.client.configured",
        extra={
            "bucket": settings.certificates_bucket,
            "endpoint_url": settings.aws_endpoint_url or None,
        },
    )
    return session.client("s3", **_client_kwargs(settings))
