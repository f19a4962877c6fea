from functools import lru_cache

from teamdrive.services import FolderService, ImageService


@lru_cache
def get_folder_service() -> FolderService:
    return FolderService()


@lru_cache
def get_image_service() -> ImageService:
    return ImageService()
