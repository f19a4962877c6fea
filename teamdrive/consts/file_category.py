from enum import Enum


class FileCategory(str, Enum):
    IMAGE = "image"
    OTHER = "other"
