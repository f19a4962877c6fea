import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from teamdrive.consts import FolderType
from teamdrive.core.exceptions import (
    ConflictError, InvalidIdError, NotFoundError, OperationTimeoutError, PersistenceError
)
from teamdrive.crud.file import FileCRUD
from teamdrive.crud.folder import FolderCRUD
from teamdrive.crud.user import UserCRUD
from teamdrive.models.folder import Folder
from teamdrive.schemas import FolderCreate
from teamdrive.utils.path_util import root_folder_path

TEAM = "team-alpha"


def _model(name: str) -> MagicMock:
    model = MagicMock()
    model.__name__ = name
    model.model_fields = {"last_modified_time": None}
    return model


def _cursor(items):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=items)
    cursor.count = AsyncMock(return_value=len(items))
    return cursor


@pytest.fixture
def folder_crud():
    crud = FolderCRUD()
    crud.model = _model("Folder")
    return crud


@pytest.fixture
def file_crud():
    crud = FileCRUD()
    crud.model = _model("File")
    return crud


class TestFolderCRUD:
    @pytest.mark.asyncio
    async def test_get_by_id_is_team_scoped(self, folder_crud):
        folder_id = str(ObjectId())
        folder = MagicMock()
        folder_crud.model.find_one = AsyncMock(return_value=folder)

        assert await folder_crud.get_folder_by_id(TEAM, folder_id) is folder
        folder_crud.model.find_one.assert_awaited_once_with({"_id": ObjectId(folder_id), "team_id": TEAM})

    @pytest.mark.asyncio
    async def test_malformed_id(self, folder_crud):
        folder_crud.model.find_one = AsyncMock()

        with pytest.raises(InvalidIdError):
            await folder_crud.get_folder_by_id(TEAM, "nope")
        folder_crud.model.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, folder_crud):
        folder_crud.model.find_one = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError) as exc_info:
            await folder_crud.get_folder_by_id(TEAM, str(ObjectId()))
        assert exc_info.value.message == "Folder not found"

    @pytest.mark.asyncio
    async def test_get_root(self, folder_crud):
        root = MagicMock()
        folder_crud.model.find_one = AsyncMock(return_value=root)

        assert await folder_crud.get_folder_root(TEAM) is root
        folder_crud.model.find_one.assert_awaited_once_with({"team_id": TEAM, "type": "root"})

    @pytest.mark.asyncio
    async def test_missing_root(self, folder_crud):
        folder_crud.model.find_one = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await folder_crud.get_folder_root(TEAM)

    @pytest.mark.asyncio
    async def test_children_query(self, folder_crud):
        children = [MagicMock(), MagicMock()]
        folder_crud.model.find = MagicMock(return_value=_cursor(children))

        assert await folder_crud.get_folder_content_by_id(TEAM, "parent-1") == children
        folder_crud.model.find.assert_called_once_with({"team_id": TEAM, "parent_folder": "parent-1"})

    @pytest.mark.asyncio
    async def test_count_roots(self, folder_crud):
        folder_crud.model.find = MagicMock(return_value=_cursor([MagicMock()]))

        assert await folder_crud.count_roots(TEAM) == 1
        folder_crud.model.find.assert_called_once_with({"team_id": TEAM, "type": FolderType.ROOT.value})

    @pytest.mark.asyncio
    async def test_create_folder_keeps_caller_id(self, folder_crud):
        folder_id = str(ObjectId())
        document = MagicMock()
        document.id = ObjectId(folder_id)
        document.insert = AsyncMock()
        folder_crud.model.return_value = document

        created_id = await folder_crud.create_folder(TEAM, FolderCreate(
            id=folder_id, team_id=TEAM, name="root", type=FolderType.ROOT, path=root_folder_path(folder_id),
        ))

        assert created_id == folder_id
        kwargs = folder_crud.model.call_args.kwargs
        assert kwargs["id"] == ObjectId(folder_id)
        assert kwargs["team_id"] == TEAM
        document.insert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_root_is_conflict(self, folder_crud):
        folder_id = str(ObjectId())
        document = MagicMock()
        document.insert = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))
        folder_crud.model.return_value = document

        with pytest.raises(ConflictError) as exc_info:
            await folder_crud.create_folder(TEAM, FolderCreate(
                id=folder_id, team_id=TEAM, name="root", type=FolderType.ROOT, path=root_folder_path(folder_id),
            ))
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_driver_error(self, folder_crud):
        folder_crud.model.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))

        with pytest.raises(PersistenceError):
            await folder_crud.get_folder_root(TEAM)

    @pytest.mark.asyncio
    async def test_deadline(self, folder_crud):
        with pytest.raises(OperationTimeoutError):
            await folder_crud._run(asyncio.sleep(1), "slow", timeout=0.01)


class TestFileCRUD:
    @pytest.mark.asyncio
    async def test_files_by_folder_are_team_scoped(self, file_crud):
        file_crud.model.find = MagicMock(return_value=_cursor([]))

        assert await file_crud.get_files_by_folder_id(TEAM, "folder-1") == []
        file_crud.model.find.assert_called_once_with({"team_id": TEAM, "folder_id": "folder-1"})

    @pytest.mark.asyncio
    async def test_rename_sets_name_and_path(self, file_crud):
        file_id = str(ObjectId())
        query = MagicMock()
        query.update = AsyncMock(return_value=MagicMock(matched_count=1))
        file_crud.model.find_one = MagicMock(return_value=query)

        await file_crud.rename_file(TEAM, file_id, "Q2.pdf", ["root", "Q2.pdf"])

        file_crud.model.find_one.assert_called_once_with({"_id": ObjectId(file_id), "team_id": TEAM})
        update = query.update.await_args.args[0]["$set"]
        assert update["name"] == "Q2.pdf"
        assert update["path"] == ["root", "Q2.pdf"]
        assert "last_modified_time" in update

    @pytest.mark.asyncio
    async def test_rename_missing(self, file_crud):
        query = MagicMock()
        query.update = AsyncMock(return_value=MagicMock(matched_count=0))
        file_crud.model.find_one = MagicMock(return_value=query)

        with pytest.raises(NotFoundError):
            await file_crud.rename_file(TEAM, str(ObjectId()), "x.pdf", ["root", "x.pdf"])

    @pytest.mark.asyncio
    async def test_delete_missing(self, file_crud):
        query = MagicMock()
        query.delete = AsyncMock(return_value=MagicMock(deleted_count=0))
        file_crud.model.find_one = MagicMock(return_value=query)

        with pytest.raises(NotFoundError) as exc_info:
            await file_crud.delete_file(TEAM, str(ObjectId()))
        assert exc_info.value.message == "File not found"

    @pytest.mark.asyncio
    async def test_delete(self, file_crud):
        query = MagicMock()
        query.delete = AsyncMock(return_value=MagicMock(deleted_count=1))
        file_crud.model.find_one = MagicMock(return_value=query)

        await file_crud.delete_file(TEAM, str(ObjectId()))

        query.delete.assert_awaited_once()


class TestUserCRUD:
    @pytest.mark.asyncio
    async def test_unknown_user(self):
        crud = UserCRUD()
        crud.model = _model("User")
        crud.model.find_one = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await crud.get_user_by_id(str(ObjectId()))


class TestFolderIndexes:
    """Index declarations that back the directory invariants"""

    @staticmethod
    def _index(name):
        for index in Folder.Settings.indexes:
            if index.document["name"] == name:
                return index.document
        raise AssertionError(f"index {name} not declared")

    def test_one_root_per_team(self):
        index = self._index("unique_team_root")

        assert list(index["key"].items()) == [("team_id", 1), ("type", 1)]
        assert index["unique"] is True
        assert index["partialFilterExpression"] == {"type": FolderType.ROOT.value}

    def test_children_lookup_index(self):
        index = self._index("team_parent")

        assert list(index["key"].items()) == [("team_id", 1), ("parent_folder", 1)]
        assert "unique" not in index
