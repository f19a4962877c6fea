from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamdrive.consts import FolderType
from teamdrive.models.folder import FolderPathItem
from teamdrive.schemas.file import FileResponse


class FolderCreate(BaseModel):
    """Internal schema for creating folder with all required fields"""
    id: str
    team_id: str
    name: str
    type: FolderType = FolderType.DEFAULT
    path: List[FolderPathItem]
    parent_folder: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_modified_time: datetime = Field(default_factory=datetime.utcnow)


class FolderCreateRequest(BaseModel):
    """Body of a folder creation request; a blank parent means the team root"""
    name: str = Field(..., min_length=1, max_length=255)
    parent_folder: Optional[str] = Field(None, alias="parentFolder")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"name": "Reports", "parentFolder": ""}},
    )


class FolderResponse(BaseModel):
    """Schema for returning folder information"""
    id: str
    name: str
    type: FolderType
    path: List[FolderPathItem]
    parent_folder_id: Optional[str] = None
    created_at: datetime
    last_modified_time: datetime


class RootFolderInfo(BaseModel):
    id: str
    name: str
    type: FolderType
    path: List[FolderPathItem]
    created_at: datetime
    last_modified_time: datetime


class RootFolderResponse(BaseModel):
    folder_info: RootFolderInfo
    folders: List[FolderResponse] = Field(default_factory=list)
    files: List[FileResponse] = Field(default_factory=list)


class FolderContentResponse(BaseModel):
    folder_info: FolderResponse
    folders: List[FolderResponse] = Field(default_factory=list)
    files: List[FileResponse] = Field(default_factory=list)
