from typing import List

from teamdrive.configs.settings import settings
from teamdrive.consts import FolderType
from teamdrive.crud.base import BaseCRUD, to_object_id
from teamdrive.models.folder import Folder
from teamdrive.schemas import FolderCreate


class FolderCRUD(BaseCRUD[Folder, FolderCreate]):
    entity = "folder"

    def __init__(self):
        super().__init__(Folder)

    async def create_folder(self, team_id: str, obj_in: FolderCreate) -> str:
        """Insert a folder whose id was generated by the caller; returns that id"""
        data = obj_in.model_dump()
        data["id"] = to_object_id(obj_in.id, self.entity)
        data["team_id"] = team_id
        folder = self.model(**data)
        await self._run(folder.insert(), "create_folder")
        return str(folder.id)

    async def get_folder_root(self, team_id: str, folder_type: FolderType = FolderType.ROOT) -> Folder:
        """Get the team's root folder"""
        folder = await self._run(
            self.model.find_one({"team_id": team_id, "type": folder_type.value}),
            "get_folder_root",
        )
        if not folder:
            raise self._not_found()
        return folder

    async def get_folder_by_id(self, team_id: str, folder_id: str) -> Folder:
        return await self.get_by_id(team_id, folder_id)

    async def get_folder_content_by_id(self, team_id: str, parent_folder_id: str) -> List[Folder]:
        """Immediate child folders of a folder (one level)"""
        return await self._run(
            self.model.find({"team_id": team_id, "parent_folder": parent_folder_id}).to_list(),
            "get_folder_content_by_id",
        )

    async def count_roots(self, team_id: str) -> int:
        """Number of root-typed folders of a team; anything but 1 is a broken invariant"""
        return await self._run(
            self.model.find({"team_id": team_id, "type": FolderType.ROOT.value}).count(),
            "count_roots",
            settings.TIMEOUT_METADATA_LOOKUP,
        )


folder_crud = FolderCRUD()
