from dataclasses import dataclass

from fastapi import Depends, Header
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED

from teamdrive.core.exceptions import AppError
from teamdrive.crud import user_crud
from teamdrive.utils.verify_token import verify_token


@dataclass(frozen=True)
class TeamContext:
    """Acting user and the team the request is scoped to"""
    user_id: str
    team_id: str


def get_team_header(
    x_team_id: str = Header(..., alias="X-Team-Id", description="Team the request operates on")
) -> str:
    """
    FastAPI dependency extracting the team id from the X-Team-Id header.
    Membership and role checks happen upstream, not here.
    """
    team_id = x_team_id.strip()
    if not team_id:
        raise AppError("Team id is required", status_code=HTTP_400_BAD_REQUEST, field="X-Team-Id")
    return team_id


async def get_team_context(
    current_user=Depends(verify_token),
    team_id: str = Depends(get_team_header),
) -> TeamContext:
    clerk_id = current_user.get("sub")
    user = await user_crud.get_by_clerk_id(clerk_id) if clerk_id else None
    if not user:
        raise AppError("User not found", status_code=HTTP_401_UNAUTHORIZED, code="unauthorized")
    return TeamContext(user_id=str(user.id), team_id=team_id)
