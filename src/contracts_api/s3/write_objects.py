"""Functions for writing objects to an S3 bucket--the "C" in CRUD."""

from typing import TYPE_CHECKING, BinaryIO, Optional, Union

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: Union[bytes, BinaryIO],
    s3_client: "S3Client",
    content_type: Optional[str] = None,
    acl: Optional[str] = None,
) -> None:
    """
    Upload a file to an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: The content of the file to upload.
    :param s3_client: The boto3 S3 client to use.
    :param content_type: The MIME type of the file, e.g. "application/zip" for an archive.
    :param acl: Optional canned ACL, e.g. "public-read".
    """
    content_type = content_type or "application/octet-stream"
    put_kwargs = {
        "Bucket": bucket_name,
        "Key": object_key,
        "Body": file_content,
        "ContentType": content_type,
    }
    if acl:
        put_kwargs["ACL"] = acl
    s3_client.put_object(**put_kwargs)
