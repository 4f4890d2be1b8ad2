"""Functions for reading object metadata from an S3 bucket--the "R" in CRUD."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import HeadObjectOutputTypeDef


def fetch_s3_object_metadata(bucket_name: str, object_key: str, s3_client: "S3Client") -> "HeadObjectOutputTypeDef":
    """
    Fetch the metadata (size, content type, ...) of an object without its body.

    :param bucket_name: Name of the S3 bucket.
    :param object_key: Key of the object to read.
    :param s3_client: The boto3 S3 client to use.
    """
    return s3_client.head_object(Bucket=bucket_name, Key=object_key)
