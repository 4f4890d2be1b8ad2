"""S3 client construction from settings."""

import logging
from typing import TYPE_CHECKING, Optional

import boto3

from contracts_api.config.settings import AWS_MOCK, Settings

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def get_s3_client(settings: Settings) -> "S3Client":
    """Create an S3 client configured for the deployment mode."""
    client_kwargs = {
        "region_name": settings.aws_region,
    }
    if settings.aws_access_key_id:
        client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url

    logger.debug(f"Creating s3 client (mode={settings.deployment_mode}, region={settings.aws_region})")
    return boto3.client("s3", **client_kwargs)


def ensure_bucket(bucket_name: str, s3_client: "S3Client", region: Optional[str] = None) -> None:
    """Create the bucket if it does not exist yet (aws-mock convenience)."""
    existing = {bucket["Name"] for bucket in s3_client.list_buckets().get("Buckets", [])}
    if bucket_name in existing:
        return
    if region and region != "us-east-1":
        s3_client.create_bucket(
            Bucket=bucket_name,
            CreateBucketConfiguration={"LocationConstraint": region},
        )
    else:
        s3_client.create_bucket(Bucket=bucket_name)
    logger.info(f"Created bucket {bucket_name}")


def should_create_bucket(settings: Settings) -> bool:
    return settings.deployment_mode == AWS_MOCK
