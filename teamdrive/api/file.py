import os
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status
from starlette.responses import Response

from teamdrive.api.deps import get_folder_service
from teamdrive.configs.settings import settings
from teamdrive.core.exceptions import AppError
from teamdrive.schemas import FileRenameRequest, FileRenameResponse, FileResponse, PresignedUrlResponse
from teamdrive.schemas.response import ApiError, ApiResponse
from teamdrive.services import FolderService
from teamdrive.utils import get_logger
from teamdrive.utils.api_response import attachment_disposition, created, no_content, ok
from teamdrive.utils.request import TeamContext, get_team_context

logger = get_logger(__name__)

router = APIRouter(
    tags=["Files"],
    responses={
        400: {"model": ApiError, "description": "Bad Request"},
        401: {"model": ApiError, "description": "Unauthorized"},
        404: {"model": ApiError, "description": "Not Found"},
        500: {"model": ApiError, "description": "Internal Server Error"}
    }
)


@router.post(
    "",
    response_model=ApiResponse[FileResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload File",
    description="Upload a file into a folder, or into the team root when folder is blank",
    responses={413: {"model": ApiError, "description": "File too large"}}
)
async def create_file(
    file: UploadFile = File(...),
    file_name: Optional[str] = Form(None, alias="fileName"),
    folder: Optional[str] = Form(None),
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    size = file.size
    if size is None:
        file.file.seek(0, os.SEEK_END)
        size = file.file.tell()
        file.file.seek(0)
    if size > settings.STORAGE_MAX_UPLOAD_SIZE:
        raise AppError("File too large", status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, code="file_too_large", field="file")

    _, extension = os.path.splitext(file.filename or "")
    display_name = file_name if file_name is not None else file.filename

    result = await folder_service.create_file(
        team_id=ctx.team_id,
        user_id=ctx.user_id,
        file_name=display_name,
        extension=extension,
        size=size,
        data=file.file,
        folder_id=folder,
    )
    return created(result, message="File uploaded successfully")


@router.patch(
    "",
    response_model=ApiResponse[FileRenameResponse],
    summary="Rename File",
    description="Rename a file; the extension and the stored object are kept"
)
async def rename_file(
    request: FileRenameRequest,
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    file_name = await folder_service.rename_file(ctx.team_id, request.id, request.name)
    return ok(data=FileRenameResponse(id=request.id, name=file_name), message="File renamed successfully")


@router.get(
    "/url/{file_id}",
    response_model=ApiResponse[PresignedUrlResponse],
    summary="Get Presigned Download URL",
    description="Time-limited URL for downloading a file directly from storage"
)
async def get_file_presigned_url(
    file_id: str = Path(..., description="File ID"),
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    url = await folder_service.get_file_presigned_url(ctx.team_id, file_id)
    return ok(
        data=PresignedUrlResponse(url=url, expires_in=settings.STORAGE_PRESIGNED_URL_TTL),
        message="Download URL generated successfully"
    )


@router.get(
    "/{file_id}/download",
    summary="Download File",
    description="Stream the file content through the API",
    response_class=Response,
)
async def download_file(
    file_id: str = Path(..., description="File ID"),
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    file, content = await folder_service.download_file(ctx.team_id, file_id)
    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={"Content-Disposition": attachment_disposition(file.name)},
    )


@router.delete(
    "/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete File",
    description="Delete a file from storage and database"
)
async def delete_file(
    file_id: str = Path(..., description="File ID to delete"),
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    await folder_service.delete_file(ctx.team_id, file_id)
    return no_content()
