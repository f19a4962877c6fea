from teamdrive.api.folder import router as folder_router
from teamdrive.api.file import router as file_router
from teamdrive.api.image import router as image_router

__all__ = ["folder_router", "file_router", "image_router"]
