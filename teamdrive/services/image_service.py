import uuid
from typing import BinaryIO, Optional

from teamdrive.configs.settings import settings
from teamdrive.core.exceptions import AppError, InvalidFileTypeError
from teamdrive.schemas import ImageResponse
from teamdrive.services.storage_service import StorageService
from teamdrive.utils import FileClassifier, get_logger
from teamdrive.utils.file_classifier import normalize_extension

logger = get_logger(__name__)


class ImageService:
    """Free-standing images (avatars, banners) outside the folder tree.

    No metadata is kept here: callers store the returned object name and
    pass it back to delete the image.
    """

    def __init__(self, storage: Optional[StorageService] = None, endpoint_url: Optional[str] = None):
        self.storage = storage or StorageService()
        self.endpoint_url = endpoint_url or settings.MINIO_ENDPOINT
        self.bucket = settings.STORAGE_IMAGES_BUCKET

    async def upload_image(self, file_name: str, extension: str, size: int, data: BinaryIO) -> ImageResponse:
        ext = normalize_extension(extension)
        if not FileClassifier.is_allowed_image(ext):
            raise InvalidFileTypeError(f"Invalid file type: {extension or 'none'}", field="file")

        object_name = f"{uuid.uuid4()}{ext}"
        await self.storage.upload_file(self.bucket, object_name, file_name or object_name, size, data)
        logger.info(f"Image uploaded: {object_name}")

        return ImageResponse(
            url=StorageService.build_public_url(self.bucket, object_name, self.endpoint_url),
            path=object_name,
        )

    async def delete_image(self, path: str) -> None:
        path = (path or "").strip()
        if not path:
            raise AppError("Image path is required", field="path")
        await self.storage.delete_file(self.bucket, path)
        logger.info(f"Image deleted: {path}")
