from typing import Any, Dict, Optional
from urllib.parse import quote

from starlette.responses import JSONResponse, Response
from starlette import status

from teamdrive.schemas.response import ApiResponse

def ok(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None,
):
    body = ApiResponse[Any](success=True, message=message, data=data).model_dump(mode="json", exclude_none=True)
    return JSONResponse(content=body, status_code=status_code, headers=headers)

def created(
    data: Any = None,
    message: str = "Created",
    headers: Optional[Dict[str, str]] = None,
):
    body = ApiResponse[Any](success=True, message=message, data=data).model_dump(mode="json", exclude_none=True)
    return JSONResponse(content=body, status_code=status.HTTP_201_CREATED, headers=headers)

def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def attachment_disposition(file_name: str) -> str:
    """Content-Disposition value for a download, safe for any display name

    Header values are latin-1 on the wire, so the plain ``filename`` is an
    ASCII fallback and the real name travels in the RFC 5987 ``filename*``.
    """
    fallback = "".join(
        c if c.isascii() and c.isprintable() and c not in '"\\' else "_"
        for c in file_name
    )
    encoded = quote(file_name, safe="")
    if encoded == file_name:
        return f'attachment; filename="{file_name}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"
