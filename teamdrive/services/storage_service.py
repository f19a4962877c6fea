import asyncio
from datetime import timedelta
from typing import BinaryIO, Optional
from urllib.parse import quote

from minio import Minio

from teamdrive.configs.settings import settings
from teamdrive.core.exceptions import OperationTimeoutError, StorageError
from teamdrive.utils import get_logger
from teamdrive.utils.api_response import attachment_disposition
from teamdrive.utils.concurrency import with_deadline

logger = get_logger(__name__)


class StorageService:
    """Object storage gateway over MinIO.

    Objects are addressed by bucket and a generated object name. The MinIO
    client is blocking, so every call runs in a worker thread under its own
    deadline. Failures surface as StorageError; provider detail is only logged.
    """

    def __init__(self, client: Optional[Minio] = None):
        self.client = client or Minio(
            endpoint=settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            secure=settings.MINIO_SSL
        )

    async def _call(self, operation: str, timeout: float, func, *args, **kwargs):
        try:
            return await with_deadline(asyncio.to_thread(func, *args, **kwargs), timeout, operation)
        except OperationTimeoutError:
            raise
        except Exception as e:
            logger.error(f"[STORAGE] {operation} failed: {e}", exc_info=True)
            raise StorageError()

    async def ensure_bucket(self, bucket_name: str) -> None:
        """Create the bucket on first use"""
        def _ensure():
            if not self.client.bucket_exists(bucket_name):
                self.client.make_bucket(bucket_name)
                logger.info(f"[STORAGE] Created bucket {bucket_name}")

        await self._call(f"ensure_bucket {bucket_name}", settings.TIMEOUT_METADATA_LOOKUP, _ensure)

    async def upload_file(
        self,
        bucket_name: str,
        object_name: str,
        file_name: str,
        file_size: int,
        data: BinaryIO,
    ) -> None:
        """Stream bytes to storage, tagging the object with its display name

        Args:
            bucket_name: Bucket name
            object_name: Generated object name
            file_name: Display name stored as object metadata
            file_size: Length of the stream in bytes
            data: Readable binary stream
        """
        await self.ensure_bucket(bucket_name)
        logger.info(f"[STORAGE] Uploading - bucket: {bucket_name}, object: {object_name}, size: {file_size} bytes")
        await self._call(
            f"upload {bucket_name}/{object_name}",
            settings.TIMEOUT_TRANSFER,
            self.client.put_object,
            bucket_name,
            object_name,
            data,
            file_size,
            content_type="application/octet-stream",
            metadata={"Name": quote(file_name)},
        )

    async def get_file_presigned_url(
        self,
        bucket_name: str,
        object_name: str,
        expires: timedelta,
        download_filename: Optional[str] = None,
    ) -> str:
        """Time-limited GET URL for an object"""
        response_headers = {}
        if download_filename:
            response_headers["response-content-disposition"] = attachment_disposition(download_filename)

        return await self._call(
            f"presign {bucket_name}/{object_name}",
            settings.TIMEOUT_PRESIGN,
            self.client.presigned_get_object,
            bucket_name,
            object_name,
            expires=expires,
            response_headers=response_headers or None,
        )

    async def get_file(self, bucket_name: str, object_name: str) -> bytes:
        """Read a whole object into memory"""
        def _read() -> bytes:
            response = self.client.get_object(bucket_name, object_name)
            try:
                return response.read()
            finally:
                response.close()
                response.release_conn()

        return await self._call(f"get {bucket_name}/{object_name}", settings.TIMEOUT_TRANSFER, _read)

    async def delete_file(self, bucket_name: str, object_name: str) -> None:
        logger.info(f"[STORAGE] Deleting - bucket: {bucket_name}, object: {object_name}")
        await self._call(
            f"delete {bucket_name}/{object_name}",
            settings.TIMEOUT_OBJECT_DELETE,
            self.client.remove_object,
            bucket_name,
            object_name,
        )

    @staticmethod
    def build_public_url(bucket_name: str, object_name: str, endpoint: Optional[str] = None) -> str:
        """Deterministic, non-expiring URL of an object"""
        return f"https://{endpoint or settings.MINIO_ENDPOINT}/{bucket_name}/{object_name}"
