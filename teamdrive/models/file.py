from typing import Annotated, List
from beanie import Document, Indexed
from pydantic import Field
from pymongo import ASCENDING, IndexModel

from teamdrive.models.time_mixin import TimeMixin


class File(Document, TimeMixin):
    """File metadata; the bytes live in object storage under file_path"""

    team_id: Annotated[str, Indexed(str)] = Field(..., description="Team that owns the file")
    folder_id: str = Field(..., description="Owning folder id")
    owner_name: str = Field(..., description="Uploader display name")
    name: str = Field(..., description="Display name including extension")
    file_path: str = Field(..., description="Object name in storage")
    key: str = Field(..., description="Generated uuid part of the object name")
    url: str = Field(..., description="Public URL of the object")
    type: str = Field(..., description="Category and extension, e.g. image/png")
    path: List[str] = Field(default_factory=list, description="Ancestor folder names followed by the file name")
    size: int = Field(0, ge=0, description="File size (bytes)")
    extension: str = Field(..., description="Extension without the leading dot")

    class Settings:
        name = "files"
        indexes = [
            IndexModel([("team_id", ASCENDING), ("folder_id", ASCENDING)], name="team_folder"),
        ]
