from teamdrive.consts import FileCategory

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
# Standalone uploads (avatars, banners) additionally accept svg
ALLOWED_IMAGE_UPLOAD_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".svg"})


def normalize_extension(file_ext: str) -> str:
    """Lowercase extension with exactly one leading dot ("" stays "")"""
    file_ext = (file_ext or "").strip().lower()
    if not file_ext:
        return ""
    return file_ext if file_ext.startswith(".") else f".{file_ext}"


class FileClassifier:
    """Utility class for classifying and checking file types"""

    @staticmethod
    def classify(file_ext: str) -> FileCategory:
        """Coarse content category of a stored file"""
        if normalize_extension(file_ext) in IMAGE_EXTENSIONS:
            return FileCategory.IMAGE
        return FileCategory.OTHER

    @staticmethod
    def build_type_tag(file_ext: str) -> str:
        """Type tag stored on a file record, e.g. "image/png" or "other/pdf" """
        category = FileClassifier.classify(file_ext)
        return f"{category.value}/{normalize_extension(file_ext).lstrip('.')}"

    @staticmethod
    def is_allowed_image(file_ext: str) -> bool:
        """Strict allow-list for standalone image uploads"""
        return normalize_extension(file_ext) in ALLOWED_IMAGE_UPLOAD_EXTENSIONS
