"""
Blob stores for contract archives.

Each store writes a body under a unique key derived from the sanitized name,
reports the size it actually stored, and deletes by the URL it handed out.
"""

import logging
import posixpath
import secrets
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Optional, Union
from urllib.parse import quote, unquote

from botocore.exceptions import BotoCoreError, ClientError

from contracts_api.config.settings import Settings
from contracts_api.errors import OrphanedBlobError, UpstreamStorageError
from contracts_api.s3.client import ensure_bucket, get_s3_client, should_create_bucket
from contracts_api.s3.delete_objects import delete_s3_object
from contracts_api.s3.read_objects import fetch_s3_object_metadata
from contracts_api.s3.write_objects import upload_s3_object

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

Body = Union[bytes, BinaryIO]

BLOB_ROUTE_PREFIX = "/blobs"


@dataclass(frozen=True)
class StoredBlob:
    """What the blob store reports back after a successful write."""
    pathname: str
    url: str
    size: int
    content_type: str


def unique_pathname(pathname: str) -> str:
    """Add a random suffix before the extension so two uploads never share a key."""
    stem, ext = posixpath.splitext(pathname)
    return f"{stem}-{secrets.token_hex(4)}{ext}"


class BlobStore:
    """Base class for blob stores (to be extended by specific implementations)"""

    def put(self, pathname: str, body: Body, content_type: Optional[str] = None) -> StoredBlob:
        raise NotImplementedError

    def delete(self, url: str) -> None:
        raise NotImplementedError

    def ping(self) -> None:
        """Raise if the store cannot be reached."""
        raise NotImplementedError

    def _pathname_from_url(self, url: str, base_url: str) -> str:
        prefix = base_url.rstrip("/") + "/"
        if not url.startswith(prefix) or len(url) == len(prefix):
            raise UpstreamStorageError(f"URL is not managed by this blob store: {url}")
        return unquote(url[len(prefix):])


class S3BlobStore(BlobStore):
    """Blob store writing objects to an S3 bucket."""

    def __init__(
        self,
        bucket_name: str,
        base_url: str,
        s3_client: "S3Client",
        acl: Optional[str] = "public-read",
    ):
        self.bucket_name = bucket_name
        self.base_url = base_url.rstrip("/")
        self.s3_client = s3_client
        self.acl = acl
        logger.info(f"Using S3 bucket: {bucket_name}")

    def url_for(self, pathname: str) -> str:
        return f"{self.base_url}/{quote(pathname)}"

    def put(self, pathname: str, body: Body, content_type: Optional[str] = None) -> StoredBlob:
        object_key = unique_pathname(pathname)
        try:
            upload_s3_object(
                bucket_name=self.bucket_name,
                object_key=object_key,
                file_content=body,
                s3_client=self.s3_client,
                content_type=content_type,
                acl=self.acl,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error uploading {object_key} to S3: {e}")
            raise UpstreamStorageError(str(e)) from e

        try:
            metadata = fetch_s3_object_metadata(self.bucket_name, object_key, self.s3_client)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error reading metadata of {object_key}, removing it: {e}")
            try:
                delete_s3_object(self.bucket_name, object_key, self.s3_client)
            except (ClientError, BotoCoreError) as cleanup_error:
                logger.warning(f"Could not remove {object_key} after failed upload: {cleanup_error}")
                raise OrphanedBlobError(str(e), self.url_for(object_key)) from e
            raise UpstreamStorageError(str(e)) from e

        logger.info(f"Uploaded {object_key} to bucket {self.bucket_name}")
        return StoredBlob(
            pathname=object_key,
            url=self.url_for(object_key),
            size=metadata["ContentLength"],
            content_type=metadata.get("ContentType") or content_type or "application/octet-stream",
        )

    def delete(self, url: str) -> None:
        object_key = self._pathname_from_url(url, self.base_url)
        try:
            delete_s3_object(self.bucket_name, object_key, self.s3_client)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error deleting {object_key} from S3: {e}")
            raise UpstreamStorageError(str(e)) from e
        logger.info(f"Deleted {object_key} from bucket {self.bucket_name}")

    def ping(self) -> None:
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
        except (ClientError, BotoCoreError) as e:
            raise UpstreamStorageError(str(e)) from e


class LocalBlobStore(BlobStore):
    """Blob store writing files under a local directory, served by the `/blobs` route."""

    def __init__(self, storage_dir: Union[str, Path], base_url: str):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.base_url = base_url.rstrip("/") + BLOB_ROUTE_PREFIX
        logger.info(f"LocalBlobStore initialized at: {self.storage_dir}")

    def url_for(self, pathname: str) -> str:
        return f"{self.base_url}/{quote(pathname)}"

    def path_for(self, pathname: str) -> Optional[Path]:
        """Resolve a pathname inside the storage dir; None if it escapes it."""
        root = self.storage_dir.resolve()
        candidate = (root / pathname).resolve()
        if candidate == root or root not in candidate.parents:
            return None
        return candidate

    def put(self, pathname: str, body: Body, content_type: Optional[str] = None) -> StoredBlob:
        stored_name = unique_pathname(pathname)
        dest_path = self.path_for(stored_name)
        if dest_path is None:
            raise UpstreamStorageError(f"Invalid blob pathname: {pathname}")
        try:
            with open(dest_path, "wb") as f:
                if isinstance(body, bytes):
                    f.write(body)
                else:
                    shutil.copyfileobj(body, f)
            size = dest_path.stat().st_size
        except OSError as e:
            logger.error(f"Error writing {dest_path}: {e}")
            raise UpstreamStorageError(str(e)) from e

        logger.info(f"Stored {stored_name} ({size} bytes) in {self.storage_dir}")
        return StoredBlob(
            pathname=stored_name,
            url=self.url_for(stored_name),
            size=size,
            content_type=content_type or "application/octet-stream",
        )

    def delete(self, url: str) -> None:
        pathname = self._pathname_from_url(url, self.base_url)
        path = self.path_for(pathname)
        if path is None:
            raise UpstreamStorageError(f"URL is not managed by this blob store: {url}")
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error deleting {path}: {e}")
            raise UpstreamStorageError(str(e)) from e
        logger.info(f"Deleted {pathname} from {self.storage_dir}")

    def ping(self) -> None:
        if not self.storage_dir.is_dir():
            raise UpstreamStorageError(f"Storage directory missing: {self.storage_dir}")


def get_blob_store(settings: Settings) -> BlobStore:
    """Build the blob store for the configured deployment mode."""
    if settings.uses_s3:
        s3_client = get_s3_client(settings)
        if should_create_bucket(settings):
            ensure_bucket(settings.s3_bucket_name, s3_client, settings.aws_region)
        return S3BlobStore(
            bucket_name=settings.s3_bucket_name,
            base_url=settings.s3_base_url,
            s3_client=s3_client,
            acl=settings.s3_object_acl,
        )
    return LocalBlobStore(settings.storage_dir, settings.public_base_url)
