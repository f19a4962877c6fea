"""Shared pytest fixtures: in-memory stand-ins for MongoDB collections and MinIO."""

from types import SimpleNamespace
from typing import Dict, List, Tuple

import pytest
from bson import ObjectId

from teamdrive.consts import FolderType
from teamdrive.core.exceptions import (
    ConflictError, InvalidIdError, NotFoundError, PersistenceError, StorageError
)
from teamdrive.schemas import FileCreate, FolderCreate
from teamdrive.services import FolderService, ImageService


def _check_id(id: str, entity: str) -> None:
    if not ObjectId.is_valid(id):
        raise InvalidIdError(f"Invalid {entity} id: {id}")


class FakeFolderCRUD:
    """Folder directory backed by a dict; enforces one root per team like the unique index"""

    def __init__(self, journal: List[str], enforce_unique_root: bool = True):
        self.journal = journal
        self.enforce_unique_root = enforce_unique_root
        self.folders: Dict[str, FolderCreate] = {}

    async def create_folder(self, team_id: str, obj_in: FolderCreate) -> str:
        _check_id(obj_in.id, "folder")
        if obj_in.id in self.folders:
            raise ConflictError("Folder already exists")
        if self.enforce_unique_root and obj_in.type == FolderType.ROOT and await self.count_roots(team_id):
            raise ConflictError("Folder already exists")
        self.folders[obj_in.id] = obj_in.model_copy(update={"team_id": team_id})
        self.journal.append(f"directory.create:{obj_in.name}")
        return obj_in.id

    async def get_folder_root(self, team_id: str, folder_type: FolderType = FolderType.ROOT):
        for folder in self.folders.values():
            if folder.team_id == team_id and folder.type == folder_type:
                return folder
        raise NotFoundError("Folder not found")

    async def get_folder_by_id(self, team_id: str, folder_id: str):
        _check_id(folder_id, "folder")
        folder = self.folders.get(folder_id)
        if not folder or folder.team_id != team_id:
            raise NotFoundError("Folder not found")
        return folder

    async def get_folder_content_by_id(self, team_id: str, parent_folder_id: str):
        return [
            folder for folder in self.folders.values()
            if folder.team_id == team_id and folder.parent_folder == parent_folder_id
        ]

    async def count_roots(self, team_id: str) -> int:
        return sum(1 for f in self.folders.values() if f.team_id == team_id and f.type == FolderType.ROOT)


class FakeFileCRUD:
    def __init__(self, journal: List[str]):
        self.journal = journal
        self.files: Dict[str, SimpleNamespace] = {}
        self.fail_create = False
        self.fail_delete = False

    async def create(self, obj_in: FileCreate):
        if self.fail_create:
            raise PersistenceError()
        record = SimpleNamespace(id=str(ObjectId()), **obj_in.model_dump())
        self.files[record.id] = record
        self.journal.append(f"registry.create:{record.file_path}")
        return record

    async def get_file_by_id(self, team_id: str, file_id: str):
        _check_id(file_id, "file")
        file = self.files.get(file_id)
        if not file or file.team_id != team_id:
            raise NotFoundError("File not found")
        return file

    async def get_files_by_folder_id(self, team_id: str, folder_id: str):
        return [f for f in self.files.values() if f.team_id == team_id and f.folder_id == folder_id]

    async def rename_file(self, team_id: str, file_id: str, name: str, path: List[str]) -> None:
        file = await self.get_file_by_id(team_id, file_id)
        file.name = name
        file.path = list(path)

    async def delete_file(self, team_id: str, file_id: str) -> None:
        if self.fail_delete:
            raise PersistenceError()
        file = await self.get_file_by_id(team_id, file_id)
        del self.files[file.id]
        self.journal.append(f"registry.delete:{file.file_path}")


class FakeUserCRUD:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}

    def add(self, first_name: str, last_name: str) -> str:
        user_id = str(ObjectId())
        self.users[user_id] = SimpleNamespace(id=user_id, first_name=first_name, last_name=last_name)
        return user_id

    async def get_user_by_id(self, user_id: str):
        if user_id not in self.users:
            raise NotFoundError("User not found")
        return self.users[user_id]


class FakeStorage:
    """Bucket/object map with the StorageService call surface"""

    def __init__(self, journal: List[str]):
        self.journal = journal
        self.objects: Dict[Tuple[str, str], bytes] = {}
        self.metadata: Dict[Tuple[str, str], str] = {}
        self.fail_upload = False
        self.fail_delete = False

    async def ensure_bucket(self, bucket_name: str) -> None:
        return None

    async def upload_file(self, bucket_name, object_name, file_name, file_size, data) -> None:
        if self.fail_upload:
            raise StorageError()
        self.objects[(bucket_name, object_name)] = data.read()
        self.metadata[(bucket_name, object_name)] = file_name
        self.journal.append(f"storage.upload:{object_name}")

    async def get_file_presigned_url(self, bucket_name, object_name, expires, download_filename=None) -> str:
        return f"https://presigned.local/{bucket_name}/{object_name}?expires={int(expires.total_seconds())}"

    async def get_file(self, bucket_name, object_name) -> bytes:
        if (bucket_name, object_name) not in self.objects:
            raise StorageError()
        return self.objects[(bucket_name, object_name)]

    async def delete_file(self, bucket_name, object_name) -> None:
        if self.fail_delete:
            raise StorageError()
        self.objects.pop((bucket_name, object_name), None)
        self.journal.append(f"storage.delete:{object_name}")


@pytest.fixture
def journal() -> List[str]:
    """Ordered record of storage and metadata writes"""
    return []


@pytest.fixture
def folder_crud(journal):
    return FakeFolderCRUD(journal)


@pytest.fixture
def file_crud(journal):
    return FakeFileCRUD(journal)


@pytest.fixture
def user_crud():
    return FakeUserCRUD()


@pytest.fixture
def storage(journal):
    return FakeStorage(journal)


@pytest.fixture
def folder_service(folder_crud, file_crud, user_crud, storage):
    return FolderService(
        folder_crud=folder_crud,
        file_crud=file_crud,
        user_crud=user_crud,
        storage=storage,
        endpoint_url="storage.example.com",
    )


@pytest.fixture
def image_service(storage):
    return ImageService(storage=storage, endpoint_url="storage.example.com")


@pytest.fixture
def user_id(user_crud) -> str:
    return user_crud.add("Ada", "Lovelace")
