from .storage_service import StorageService
from .folder_service import FolderService
from .image_service import ImageService

__all__ = ["StorageService", "FolderService", "ImageService"]
