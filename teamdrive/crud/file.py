from typing import List

from teamdrive.configs.settings import settings
from teamdrive.crud.base import BaseCRUD
from teamdrive.models.file import File
from teamdrive.schemas.file import FileCreate


class FileCRUD(BaseCRUD[File, FileCreate]):
    entity = "file"

    def __init__(self):
        super().__init__(File)

    async def get_file_by_id(self, team_id: str, file_id: str) -> File:
        return await self.get_by_id(team_id, file_id, timeout=settings.TIMEOUT_METADATA_LOOKUP)

    async def get_files_by_folder_id(self, team_id: str, folder_id: str) -> List[File]:
        """Files stored directly in a folder"""
        return await self._run(
            self.model.find({"team_id": team_id, "folder_id": folder_id}).to_list(),
            "get_files_by_folder_id",
        )

    async def rename_file(self, team_id: str, file_id: str, name: str, path: List[str]) -> None:
        """Set the display name and breadcrumb; the stored object is untouched"""
        await self.update(team_id, file_id, {"name": name, "path": list(path)})

    async def delete_file(self, team_id: str, file_id: str) -> None:
        await self.delete(team_id, file_id, timeout=settings.TIMEOUT_METADATA_DELETE)


file_crud = FileCRUD()
