from teamdrive.consts.folder_type import FolderType, ROOT_FOLDER_NAME
from teamdrive.consts.file_category import FileCategory

__all__ = ["FolderType", "ROOT_FOLDER_NAME", "FileCategory"]
