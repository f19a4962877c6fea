from enum import Enum

ROOT_FOLDER_NAME = "root"


class FolderType(str, Enum):
    ROOT = "root"
    DEFAULT = "default"
