import uuid
from datetime import timedelta
from typing import BinaryIO, Optional, Tuple

from bson import ObjectId

from teamdrive.configs.settings import settings
from teamdrive.consts import FolderType, ROOT_FOLDER_NAME
from teamdrive.core.exceptions import AppError, EmptyFileNameError
from teamdrive.crud.file import FileCRUD
from teamdrive.crud.folder import FolderCRUD
from teamdrive.crud.user import UserCRUD
from teamdrive.schemas import (
    FileCreate, FileResponse, FolderContentResponse, FolderCreate,
    FolderResponse, RootFolderInfo, RootFolderResponse
)
from teamdrive.services.storage_service import StorageService
from teamdrive.utils import FileClassifier, get_logger, log_with_context
from teamdrive.utils.concurrency import gather_or_cancel
from teamdrive.utils.file_classifier import normalize_extension
from teamdrive.utils.path_util import extend_file_path, extend_folder_path, rename_leaf, root_folder_path

logger = get_logger(__name__)


def _is_root(folder) -> bool:
    return folder.type == FolderType.ROOT


def to_folder_response(folder) -> FolderResponse:
    return FolderResponse(
        id=str(folder.id),
        name=folder.name,
        type=folder.type,
        path=folder.path,
        parent_folder_id=folder.parent_folder,
        created_at=folder.created_at,
        last_modified_time=folder.last_modified_time,
    )


def to_file_response(file) -> FileResponse:
    return FileResponse(
        id=str(file.id),
        owner_name=file.owner_name,
        name=file.name,
        folder_id=file.folder_id,
        url=file.url,
        type=file.type,
        path=file.path,
        size=file.size,
        extension=file.extension,
        created_at=file.created_at,
    )


class FolderService:
    """Team drive operations: folder tree, file metadata and the bytes behind it.

    Object storage writes always complete before the matching metadata write
    (upload then register, delete object then delete record). The two stores
    are not transactional: a failed registration triggers a best-effort delete
    of the uploaded object, while a failed record delete after the object is
    gone is only logged.
    """

    def __init__(
        self,
        folder_crud: Optional[FolderCRUD] = None,
        file_crud: Optional[FileCRUD] = None,
        user_crud: Optional[UserCRUD] = None,
        storage: Optional[StorageService] = None,
        endpoint_url: Optional[str] = None,
    ):
        self.folder_crud = folder_crud or FolderCRUD()
        self.file_crud = file_crud or FileCRUD()
        self.user_crud = user_crud or UserCRUD()
        self.storage = storage or StorageService()
        self.endpoint_url = endpoint_url or settings.MINIO_ENDPOINT
        self.bucket = settings.STORAGE_DOCUMENTS_BUCKET

    async def _resolve_folder(self, team_id: str, folder_id: Optional[str]):
        """Explicit folder by id, or the team root when the id is blank"""
        if not folder_id or not folder_id.strip():
            return await self.folder_crud.get_folder_root(team_id)
        return await self.folder_crud.get_folder_by_id(team_id, folder_id.strip())

    async def create_root_folder(self, team_id: str) -> FolderResponse:
        """Bootstrap the root folder of a new team.

        The unique (team_id, type=root) index turns a second call into a ConflictError.
        """
        folder_id = str(ObjectId())
        folder_in = FolderCreate(
            id=folder_id,
            team_id=team_id,
            name=ROOT_FOLDER_NAME,
            type=FolderType.ROOT,
            path=root_folder_path(folder_id),
        )
        await self.folder_crud.create_folder(team_id, folder_in)
        logger.info(f"Root folder created for team {team_id}: {folder_id}")
        return FolderResponse(
            id=folder_id,
            name=folder_in.name,
            type=folder_in.type,
            path=folder_in.path,
            parent_folder_id=None,
            created_at=folder_in.created_at,
            last_modified_time=folder_in.last_modified_time,
        )

    async def create_folder(self, team_id: str, folder_name: str, parent_folder_id: Optional[str] = None) -> FolderResponse:
        folder_name = (folder_name or "").strip()
        if not folder_name:
            raise AppError("Folder name is required", code="empty_folder_name", field="name")

        parent = await self._resolve_folder(team_id, parent_folder_id)

        # id is known before insert so descendants can reference it in their paths
        folder_id = str(ObjectId())
        folder_in = FolderCreate(
            id=folder_id,
            team_id=team_id,
            name=folder_name,
            type=FolderType.DEFAULT,
            path=extend_folder_path(parent.path, str(parent.id), parent.name, parent_is_root=_is_root(parent)),
            parent_folder=str(parent.id),
        )
        await self.folder_crud.create_folder(team_id, folder_in)
        logger.info(f"Folder created for team {team_id}: {folder_id} ({folder_name}) under {parent.id}")

        return FolderResponse(
            id=folder_id,
            name=folder_in.name,
            type=folder_in.type,
            path=folder_in.path,
            parent_folder_id=folder_in.parent_folder,
            created_at=folder_in.created_at,
            last_modified_time=folder_in.last_modified_time,
        )

    async def create_file(
        self,
        team_id: str,
        user_id: str,
        file_name: str,
        extension: str,
        size: int,
        data: BinaryIO,
        folder_id: Optional[str] = None,
    ) -> FileResponse:
        """Upload bytes and register the file in a folder (team root when folder_id is blank)

        Args:
            team_id: Team ID
            user_id: Uploader, used for the denormalized owner name
            file_name: Display name
            extension: Extension of the uploaded file, e.g. ".pdf"
            size: Size of the stream in bytes
            data: Readable binary stream
            folder_id: Target folder ID
        """
        display_name = (file_name or "").strip()
        if not display_name:
            raise EmptyFileNameError()

        folder = await self._resolve_folder(team_id, folder_id)

        ext = normalize_extension(extension)
        key = str(uuid.uuid4())
        object_name = f"{key}{ext}"

        await self.storage.upload_file(self.bucket, object_name, display_name, size, data)

        try:
            user = await self.user_crud.get_user_by_id(user_id)
            file_in = FileCreate(
                team_id=team_id,
                folder_id=str(folder.id),
                owner_name=f"{user.first_name} {user.last_name}",
                name=display_name,
                file_path=object_name,
                key=key,
                url=StorageService.build_public_url(self.bucket, object_name, self.endpoint_url),
                type=FileClassifier.build_type_tag(ext),
                path=extend_file_path(folder.path, folder.name, display_name, parent_is_root=_is_root(folder)),
                size=size,
                extension=ext.lstrip("."),
            )
            file = await self.file_crud.create(file_in)
        except Exception as e:
            await self._discard_orphan(object_name, e)
            raise

        logger.info(f"File created for team {team_id}: {file.id} ({display_name}) in folder {folder.id}")
        return to_file_response(file)

    async def _discard_orphan(self, object_name: str, cause: Exception) -> None:
        """Best-effort removal of an uploaded object whose metadata was never written"""
        logger.warning(f"[FILE_CREATE] Registration failed, removing uploaded object {object_name}: {cause}")
        try:
            await self.storage.delete_file(self.bucket, object_name)
        except Exception as cleanup_error:
            log_with_context(
                logger, "error", "[FILE_CREATE] Orphaned object left in storage",
                bucket=self.bucket, object_name=object_name, error=str(cleanup_error),
            )

    async def rename_file(self, team_id: str, file_id: str, new_name: str) -> str:
        """Rename a file, keeping its extension and stored object; returns the new full name"""
        base_name = (new_name or "").strip()
        if not base_name:
            raise EmptyFileNameError()

        file = await self.file_crud.get_file_by_id(team_id, file_id)
        file_name = f"{base_name}.{file.extension}" if file.extension else base_name
        path = rename_leaf(file.path, file_name)

        await self.file_crud.rename_file(team_id, file_id, file_name, path)
        logger.info(f"File renamed for team {team_id}: {file_id} {file.name} -> {file_name}")
        return file_name

    async def get_folder_root(self, team_id: str) -> RootFolderResponse:
        folder = await self.folder_crud.get_folder_root(team_id)
        folder_id = str(folder.id)

        folders, files = await gather_or_cancel(
            self.folder_crud.get_folder_content_by_id(team_id, folder_id),
            self.file_crud.get_files_by_folder_id(team_id, folder_id),
        )

        return RootFolderResponse(
            folder_info=RootFolderInfo(
                id=folder_id,
                name=folder.name,
                type=folder.type,
                path=folder.path,
                created_at=folder.created_at,
                last_modified_time=folder.last_modified_time,
            ),
            folders=[to_folder_response(item) for item in folders],
            files=[to_file_response(item) for item in files],
        )

    async def get_folder_content(self, team_id: str, folder_id: str) -> FolderContentResponse:
        folder = await self.folder_crud.get_folder_by_id(team_id, folder_id)
        folder_id = str(folder.id)

        folders, files = await gather_or_cancel(
            self.folder_crud.get_folder_content_by_id(team_id, folder_id),
            self.file_crud.get_files_by_folder_id(team_id, folder_id),
        )

        return FolderContentResponse(
            folder_info=to_folder_response(folder),
            folders=[to_folder_response(item) for item in folders],
            files=[to_file_response(item) for item in files],
        )

    async def get_file_presigned_url(self, team_id: str, file_id: str) -> str:
        file = await self.file_crud.get_file_by_id(team_id, file_id)
        return await self.storage.get_file_presigned_url(
            self.bucket,
            file.file_path,
            timedelta(seconds=settings.STORAGE_PRESIGNED_URL_TTL),
            download_filename=file.name,
        )

    async def download_file(self, team_id: str, file_id: str) -> Tuple[FileResponse, bytes]:
        file = await self.file_crud.get_file_by_id(team_id, file_id)
        content = await self.storage.get_file(self.bucket, file.file_path)
        return to_file_response(file), content

    async def delete_file(self, team_id: str, file_id: str) -> None:
        """Delete the stored object, then its metadata record"""
        logger.info(f"[FILE_DELETE] Starting deletion - team_id: {team_id}, file_id: {file_id}")
        file = await self.file_crud.get_file_by_id(team_id, file_id)

        await self.storage.delete_file(self.bucket, file.file_path)

        try:
            await self.file_crud.delete_file(team_id, file_id)
        except AppError as e:
            log_with_context(
                logger, "error", "[FILE_DELETE] Object removed but metadata record remains",
                team_id=team_id, file_id=file_id, object_name=file.file_path, error=e.message,
            )
            raise

        logger.info(f"[FILE_DELETE] Successfully completed - file_id: {file_id}, name: {file.name}")
