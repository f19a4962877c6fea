from teamdrive.schemas.response import ApiResponse, ApiError, ErrorDetail
from teamdrive.schemas.file import (
    FileCreate, FileResponse, FileRenameRequest, FileRenameResponse, PresignedUrlResponse
)
from teamdrive.schemas.folder import (
    FolderCreate, FolderCreateRequest, FolderResponse, RootFolderInfo,
    RootFolderResponse, FolderContentResponse
)
from teamdrive.schemas.image import ImageResponse

__all__ = [
    "ApiResponse",
    "ApiError",
    "ErrorDetail",
    # File schemas
    "FileCreate",
    "FileResponse",
    "FileRenameRequest",
    "FileRenameResponse",
    "PresignedUrlResponse",
    # Folder schemas
    "FolderCreate",
    "FolderCreateRequest",
    "FolderResponse",
    "RootFolderInfo",
    "RootFolderResponse",
    "FolderContentResponse",
    "ImageResponse",
]
