from fastapi import APIRouter, Depends, Path, status

from teamdrive.api.deps import get_folder_service
from teamdrive.schemas import (
    FolderContentResponse, FolderCreateRequest, FolderResponse, RootFolderResponse
)
from teamdrive.schemas.response import ApiError, ApiResponse
from teamdrive.services import FolderService
from teamdrive.utils.api_response import created, ok
from teamdrive.utils.request import TeamContext, get_team_context, get_team_header
from teamdrive.utils.verify_token import verify_token

router = APIRouter(
    tags=["Folders"],
    responses={
        400: {"model": ApiError, "description": "Bad Request"},
        401: {"model": ApiError, "description": "Unauthorized"},
        404: {"model": ApiError, "description": "Not Found"},
        500: {"model": ApiError, "description": "Internal Server Error"}
    }
)


@router.post(
    "/root",
    response_model=ApiResponse[FolderResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Root Folder",
    description="Bootstrap the root folder of a newly provisioned team",
    responses={409: {"model": ApiError, "description": "Root folder already exists"}}
)
async def create_root_folder(
    team_id: str = Depends(get_team_header),
    _current_user = Depends(verify_token),
    folder_service: FolderService = Depends(get_folder_service),
):
    folder = await folder_service.create_root_folder(team_id)
    return created(folder, message="Root folder created successfully")


@router.get(
    "/root",
    response_model=ApiResponse[RootFolderResponse],
    summary="Get Root Folder",
    description="Root folder of the team with its immediate subfolders and files"
)
async def get_root_folder(
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    content = await folder_service.get_folder_root(ctx.team_id)
    return ok(data=content, message="Root folder retrieved successfully")


@router.post(
    "",
    response_model=ApiResponse[FolderResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Folder",
    description="Create a folder under parentFolder, or under the team root when it is blank"
)
async def create_folder(
    request: FolderCreateRequest,
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    folder = await folder_service.create_folder(ctx.team_id, request.name, request.parent_folder)
    return created(folder, message="Folder created successfully")


@router.get(
    "/{folder_id}",
    response_model=ApiResponse[FolderContentResponse],
    summary="Get Folder Content",
    description="Folder info with its immediate subfolders and files"
)
async def get_folder_content(
    folder_id: str = Path(..., description="Folder ID"),
    ctx: TeamContext = Depends(get_team_context),
    folder_service: FolderService = Depends(get_folder_service),
):
    content = await folder_service.get_folder_content(ctx.team_id, folder_id)
    return ok(data=content, message="Folder content retrieved successfully")
