from teamdrive.models.time_mixin import TimeMixin
from teamdrive.models.user import User
from teamdrive.models.folder import Folder, FolderPathItem
from teamdrive.models.file import File

__all__ = [
    "TimeMixin",
    "User",
    "Folder",
    "FolderPathItem",
    "File",
]

# List of all document models for Beanie initialization
DOCUMENT_MODELS = [
    User,
    Folder,
    File,
]
