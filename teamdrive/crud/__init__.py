from teamdrive.crud.user import user_crud
from teamdrive.crud.folder import folder_crud
from teamdrive.crud.file import file_crud

__all__ = ["user_crud", "folder_crud", "file_crud"]
