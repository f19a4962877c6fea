import os

from fastapi import APIRouter, Depends, File, Path, UploadFile, status

from teamdrive.api.deps import get_image_service
from teamdrive.schemas import ImageResponse
from teamdrive.schemas.response import ApiError, ApiResponse
from teamdrive.services import ImageService
from teamdrive.utils.api_response import created, no_content
from teamdrive.utils.verify_token import verify_token

router = APIRouter(
    tags=["Images"],
    responses={
        400: {"model": ApiError, "description": "Bad Request"},
        401: {"model": ApiError, "description": "Unauthorized"},
        500: {"model": ApiError, "description": "Internal Server Error"}
    }
)


@router.post(
    "",
    response_model=ApiResponse[ImageResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload Image",
    description="Upload a standalone image (jpg, jpeg, png or svg)"
)
async def upload_image(
    file: UploadFile = File(...),
    _current_user = Depends(verify_token),
    image_service: ImageService = Depends(get_image_service),
):
    size = file.size
    if size is None:
        file.file.seek(0, os.SEEK_END)
        size = file.file.tell()
        file.file.seek(0)

    _, extension = os.path.splitext(file.filename or "")
    image = await image_service.upload_image(file.filename, extension, size, file.file)
    return created(image, message="Image uploaded successfully")


@router.delete(
    "/{path}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Image"
)
async def delete_image(
    path: str = Path(..., description="Object name returned by the upload"),
    _current_user = Depends(verify_token),
    image_service: ImageService = Depends(get_image_service),
):
    await image_service.delete_image(path)
    return no_content()
